"""
Couche infrastructure de ClipOrg.

Ce module contient les implementations concretes des interfaces definies
dans la couche domaine (ports) :

- persistence/ : Stockage SQLite avec SQLModel (modeles et repositories)

Architecture hexagonale : les implementations ici peuvent etre remplacees
(ex: PostgreSQL au lieu de SQLite) sans modifier la logique metier.
"""
