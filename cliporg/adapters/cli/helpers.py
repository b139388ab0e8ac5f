"""
Utilitaires partages pour les commandes CLI de ClipOrg.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- cancel_on_sigint : Ctrl+C annule proprement la reconciliation en cours
"""

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from cliporg.container import Container
from cliporg.services.cancellation import CancellationToken

console = Console()


@contextmanager
def suppress_loguru() -> Iterator[None]:
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cliporg")
    try:
        yield
    finally:
        loguru_logger.enable("cliporg")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        def _my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return func(container, *args, **kwargs)
        return wrapper
    return decorator


@contextmanager
def cancel_on_sigint() -> Iterator[CancellationToken]:
    """
    Associe SIGINT a un jeton d'annulation le temps d'une operation.

    Le premier Ctrl+C demande l'arret entre deux elements (le travail deja
    applique reste en base). Le gestionnaire precedent est restaure a la sortie.
    """
    token = CancellationToken()

    def _handler(signum, frame) -> None:
        console.print("[yellow]Annulation demandee, arret apres l'element en cours...[/yellow]")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)
