"""
Resultat d'une etape "best effort".

La sonde de metadonnees et la generation de miniatures ne doivent jamais
faire echouer un ajout ou une suppression. Plutot que d'avaler les
exceptions, ces etapes retournent un Attempt : succes avec une valeur, ou
echec avec un avertissement que l'executeur rattache au resultat.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Attempt(Generic[T]):
    """
    Issue d'une tentative non bloquante.

    Attributs :
        succeeded : True si l'etape a abouti
        value : Valeur produite (None en cas d'echec)
        warning : Message d'avertissement (None en cas de succes)
    """

    succeeded: bool
    value: Optional[T] = None
    warning: Optional[str] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Attempt[T]":
        """Construit une tentative reussie."""
        return cls(succeeded=True, value=value)

    @classmethod
    def failed(cls, warning: str) -> "Attempt[T]":
        """Construit une tentative echouee avec son avertissement."""
        return cls(succeeded=False, warning=warning)
