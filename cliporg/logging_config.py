"""
Configuration du logging de ClipOrg via loguru.

Deux sorties :
- console coloree, prefixee par le dossier racine de la session en cours
- fichier JSON avec rotation, pour l'analyse historique

Messages et valeurs de contexte (record["extra"]) contiennent souvent des
chemins fournis par l'utilisateur : un patcher en retire les caracteres de
controle avant tout handler, y compris pour les valeurs ajoutees par
logger.bind() ou session_context().
"""

import sys
from contextlib import AbstractContextManager
from pathlib import Path

from loguru import logger

from cliporg.utils.helpers import sanitize_for_logging, sanitize_path_for_logging

# Valeur du contexte "root" hors d'une session de reconciliation
NO_SESSION = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[root]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def sanitize_record(record: dict) -> None:
    """Patcher loguru : assainit le message et les chaines du contexte."""
    message = record["message"]
    record["message"] = sanitize_for_logging(message, max_length=len(message))
    extra = record["extra"]
    for key, value in extra.items():
        if isinstance(value, str):
            extra[key] = sanitize_for_logging(value)


def session_context(root_folder: str) -> AbstractContextManager:
    """
    Rattache le dossier racine aux logs emis dans le bloc.

    Le contexte est local au thread ou a la tache courante : deux sessions
    en parallele ne melangent pas leurs racines.
    """
    return logger.contextualize(root=sanitize_path_for_logging(root_folder))


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cliporg.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin du fichier de log JSON
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs a conserver
    """
    logger.remove()
    logger.configure(extra={"root": NO_SESSION}, patcher=sanitize_record)

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
