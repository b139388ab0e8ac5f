"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), objets valeur
et la hierarchie d'erreurs. Cette couche n'a AUCUNE dependance vers
l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (CatalogEntry, ScannedFile, ReconciliationItem)
- ports/ : Interfaces abstraites definissant les contrats des collaborateurs
- value_objects/ : Objets valeur immutables (ProbeResult, Attempt)
"""
