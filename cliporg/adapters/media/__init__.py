"""
Adaptateurs media pour ClipOrg.

Ce package contient les implementations concretes des collaborateurs media:
- MediaInfoProbe: Titre et duree des fichiers video avec pymediainfo
- FFmpegThumbnailGenerator: Miniatures JPEG extraites avec ffmpeg
"""

from cliporg.adapters.media.ffmpeg_thumbnailer import FFmpegThumbnailGenerator
from cliporg.adapters.media.mediainfo_probe import MediaInfoProbe

__all__ = ["FFmpegThumbnailGenerator", "MediaInfoProbe"]
