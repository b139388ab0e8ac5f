"""
ClipOrg - Catalogue de clips video avec synchronisation du disque.

Ce package fournit le moteur de reconciliation entre un dossier racine
de videos et le catalogue persistant des clips connus.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, erreurs)
- services/ : Couche application (scan, diff, synchronisation, sessions)
- adapters/ : Couche infrastructure (CLI, mediainfo, ffmpeg)
- infrastructure/ : Persistance SQLite via SQLModel
- web/ : API HTTP FastAPI
"""

__version__ = "0.1.0"
