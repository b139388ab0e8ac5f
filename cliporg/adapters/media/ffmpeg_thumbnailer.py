"""
Generation des miniatures de clips avec ffmpeg.

Une image est extraite a 10% de la duree du clip (1 seconde si la duree
est inconnue), reduite pour tenir dans width x height en conservant les
proportions, et enregistree en JPEG sous {thumbnails_dir}/{clip_id}.jpg.
"""

import shutil
import subprocess
from pathlib import Path

from loguru import logger

from cliporg.core.errors import ThumbnailError
from cliporg.core.ports.media import IThumbnailGenerator
from cliporg.utils.helpers import sanitize_for_logging, sanitize_path_for_logging

# Position de la capture dans la video (fraction de la duree)
CAPTURE_RATIO = 0.1
DEFAULT_CAPTURE_SECONDS = 1.0


class FFmpegThumbnailGenerator(IThumbnailGenerator):
    """Genere et supprime les miniatures via le binaire ffmpeg."""

    def __init__(
        self,
        thumbnails_dir: Path,
        ffmpeg_binary: str = "ffmpeg",
        width: int = 320,
        height: int = 180,
        timeout_seconds: int = 30,
    ) -> None:
        self._thumbnails_dir = Path(thumbnails_dir)
        self._ffmpeg_binary = ffmpeg_binary
        self._width = width
        self._height = height
        self._timeout_seconds = timeout_seconds

    def thumbnail_path(self, clip_id: int) -> Path:
        """Chemin de la miniature d'un clip."""
        return self._thumbnails_dir / f"{clip_id}.jpg"

    def _build_command(
        self, video_path: Path, output_path: Path, capture_seconds: float
    ) -> list[str]:
        scale = (
            f"scale={self._width}:{self._height}"
            ":force_original_aspect_ratio=decrease"
        )
        return [
            self._ffmpeg_binary,
            "-ss", f"{capture_seconds:.3f}",
            "-i", str(video_path),
            "-vf", scale,
            "-frames:v", "1",
            "-q:v", "3",
            str(output_path),
            "-y",
            "-loglevel", "error",
        ]

    def generate(
        self, clip_id: int, video_path: Path, duration_seconds: int = 0
    ) -> Path:
        """
        Extrait une image du clip et l'enregistre en JPEG.

        Raises:
            ThumbnailError: ffmpeg absent, en erreur ou trop long
        """
        if shutil.which(self._ffmpeg_binary) is None:
            raise ThumbnailError(
                "FFmpeg not found. Please ensure FFmpeg is installed and added "
                "to your system PATH, or set CLIPORG_FFMPEG_BINARY"
            )
        if not video_path.is_file():
            raise ThumbnailError(f"Video file not found: {video_path.name}")

        capture_seconds = (
            duration_seconds * CAPTURE_RATIO
            if duration_seconds > 0
            else DEFAULT_CAPTURE_SECONDS
        )
        output_path = self.thumbnail_path(clip_id)
        cmd = self._build_command(video_path, output_path, capture_seconds)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            result = subprocess.run(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self._timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ThumbnailError(
                f"FFmpeg timed out after {self._timeout_seconds}s"
            ) from e
        except OSError as e:
            raise ThumbnailError(str(e)) from e

        if result.returncode != 0 or not output_path.is_file():
            stderr = result.stderr.decode(errors="replace").strip()
            raise ThumbnailError(
                f"FFmpeg failed (exit code {result.returncode}): "
                f"{sanitize_for_logging(stderr, max_length=200)}"
            )

        logger.debug(
            "Miniature generee pour le clip {clip_id}: {path}",
            clip_id=clip_id,
            path=sanitize_path_for_logging(output_path),
        )
        return output_path

    def delete(self, thumbnail_path: Path) -> None:
        """Supprime une miniature (sans effet si elle n'existe pas)."""
        try:
            Path(thumbnail_path).unlink(missing_ok=True)
        except OSError as e:
            raise ThumbnailError(f"Failed to delete thumbnail: {e}") from e
