"""
Jeton d'annulation cooperative pour les scans et les synchronisations.

L'annulation est verifiee entre deux elements, jamais au milieu d'un fichier.
Les mutations deja appliquees restent acquises (pas de rollback compensatoire).
"""

import threading


class CancellationToken:
    """
    Drapeau d'annulation partage entre l'appelant et le travail en cours.

    Thread-safe : cancel() peut etre appele depuis un handler de signal
    ou un autre thread pendant qu'une session tourne.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Demande l'arret du traitement au prochain point de controle."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
