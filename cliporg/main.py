"""
Point d'entrée CLI de ClipOrg.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import apply, preview, root_folder, sync
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="cliporg",
    help="Catalogue de clips vidéo : synchronisation avec le disque",
)
container = Container()


@app.callback()
def main_callback() -> None:
    """ClipOrg - Catalogue de clips vidéo."""


# Monter les commandes depuis commands.py
app.command()(preview)
app.command()(sync)
app.command()(apply)
app.command(name="root-folder")(root_folder)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration ClipOrg")
    typer.echo(f"Dossier racine : {config.root_folder or '(non configuré)'}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Miniatures : {config.thumbnails_dir}")
    typer.echo(f"FFmpeg : {config.ffmpeg_binary}")
    typer.echo(
        f"Chemins : {'insensibles' if config.case_insensitive_paths else 'sensibles'} à la casse"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"ClipOrg v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web ClipOrg."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("cliporg.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de ClipOrg", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
