"""
Implementation de la sonde de metadonnees avec pymediainfo.

Ce module fournit MediaInfoProbe qui implemente IMetadataProbe pour
resoudre le titre et la duree des fichiers video ajoutes au catalogue.
"""

from pathlib import Path
from typing import Optional

from pymediainfo import MediaInfo as PyMediaInfo

from cliporg.core.errors import ProbeError
from cliporg.core.ports.media import IMetadataProbe
from cliporg.core.value_objects import ProbeResult


class MediaInfoProbe(IMetadataProbe):
    """
    Sonde de metadonnees utilisant pymediainfo.

    Le titre vient du tag "title" du conteneur s'il existe, sinon du nom
    du fichier sans extension.
    """

    def probe(self, path: Path) -> ProbeResult:
        """
        Extrait le titre et la duree d'un fichier video.

        Args:
            path: Chemin complet vers le fichier video

        Returns:
            ProbeResult (duree 0 si inconnue)

        Raises:
            ProbeError: fichier absent ou illisible par MediaInfo
        """
        if not path.is_file():
            raise ProbeError(f"File not found: {path.name}")

        try:
            media_info = PyMediaInfo.parse(str(path))
        except Exception as e:
            raise ProbeError(str(e) or type(e).__name__) from e

        general_tracks = [
            track for track in media_info.tracks if track.track_type == "General"
        ]
        if not general_tracks:
            raise ProbeError(f"No media information for {path.name}")

        track = general_tracks[0]
        return ProbeResult(
            title=self._extract_title(track) or path.stem,
            duration_seconds=self._extract_duration(track) or 0,
        )

    def _extract_title(self, general_track) -> Optional[str]:
        """Retourne le titre embarque dans le conteneur, s'il est renseigne."""
        title = getattr(general_track, "title", None)
        if title is None:
            return None
        title = str(title).strip()
        return title or None

    def _extract_duration(self, general_track) -> Optional[int]:
        """
        Extrait la duree en SECONDES depuis la piste generale.

        pymediainfo retourne la duree en millisecondes.
        """
        duration_ms = general_track.duration
        if duration_ms is None:
            return None
        try:
            return int(float(duration_ms) / 1000)
        except (TypeError, ValueError):
            return None
