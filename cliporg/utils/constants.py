"""
Constantes globales pour ClipOrg.

Ce module contient les constantes partagees par le scan et la synchronisation :
- Extensions video reconnues
- Cle du parametre persiste pour le dossier racine
- Limites de troncature des logs
"""

# Extensions video reconnues (comparaison insensible a la casse)
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".webm",
    ".ogg",
    ".mov",
    ".avi",
})

# Cle du parametre "dossier racine" dans la table settings
ROOT_FOLDER_SETTING_KEY = "VideoLibrary.RootFolder"

# Longueur maximale d'une valeur utilisateur dans les logs
LOG_MAX_LENGTH = 500

# Nombre de segments conserves pour un chemin dans les logs
LOG_PATH_SEGMENTS = 3
