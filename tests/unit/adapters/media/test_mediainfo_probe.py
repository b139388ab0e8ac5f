"""
Tests unitaires pour MediaInfoProbe.

pymediainfo est mocke : seuls le titre et la duree de la piste generale
sont exploites.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cliporg.adapters.media.mediainfo_probe import MediaInfoProbe
from cliporg.core.errors import ProbeError
from cliporg.core.value_objects import ProbeResult


@pytest.fixture
def probe() -> MediaInfoProbe:
    """Instance de la sonde pour les tests."""
    return MediaInfoProbe()


@pytest.fixture
def fake_video(tmp_path: Path) -> Path:
    """Fichier factice pour passer le check is_file()."""
    video = tmp_path / "Match Day.mp4"
    video.touch()
    return video


def _general_track(duration=None, title=None) -> MagicMock:
    mock = MagicMock()
    mock.track_type = "General"
    mock.duration = duration
    mock.title = title
    return mock


def _parse_returning(*tracks) -> MagicMock:
    media_info = MagicMock()
    media_info.tracks = list(tracks)
    return media_info


class TestMediaInfoProbe:
    """Tests pour la resolution du titre et de la duree."""

    def test_title_from_file_name(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.return_value = _parse_returning(_general_track(duration=90500))

            result = probe.probe(fake_video)

        assert result == ProbeResult(title="Match Day", duration_seconds=90)

    def test_embedded_title_has_priority(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.return_value = _parse_returning(
                _general_track(duration=1000, title="  Final 2024  ")
            )

            result = probe.probe(fake_video)

        assert result.title == "Final 2024"

    def test_blank_embedded_title_is_ignored(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.return_value = _parse_returning(_general_track(title="   "))

            result = probe.probe(fake_video)

        assert result.title == "Match Day"
        assert result.duration_seconds == 0

    def test_unparseable_duration(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.return_value = _parse_returning(_general_track(duration="n/a"))

            result = probe.probe(fake_video)

        assert result.duration_seconds == 0

    def test_missing_file(self, probe: MediaInfoProbe, tmp_path: Path) -> None:
        with pytest.raises(ProbeError, match="File not found"):
            probe.probe(tmp_path / "absent.mp4")

    def test_parse_failure(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.side_effect = OSError("libmediainfo not found")

            with pytest.raises(ProbeError, match="libmediainfo"):
                probe.probe(fake_video)

    def test_no_general_track(self, probe: MediaInfoProbe, fake_video: Path) -> None:
        video_track = MagicMock()
        video_track.track_type = "Video"
        with patch("cliporg.adapters.media.mediainfo_probe.PyMediaInfo.parse") as mock_parse:
            mock_parse.return_value = _parse_returning(video_track)

            with pytest.raises(ProbeError, match="No media information"):
                probe.probe(fake_video)
