"""
Tests de la configuration loguru : assainissement et contexte de session.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

from cliporg.logging_config import NO_SESSION, configure_logging, session_context
from cliporg.services.reconciler import Reconciler
from cliporg.services.reconciliation import ReconciliationSession
from cliporg.services.scanner import FileScanner
from cliporg.services.sync_executor import SyncExecutor


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "cliporg.log"


@pytest.fixture
def records(log_file):
    """Configure le logging puis capture les enregistrements emis."""
    configure_logging(log_level="WARNING", log_file=log_file)
    captured: list[dict] = []
    logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    logger.remove()
    logger.configure(extra={}, patcher=lambda record: None)
    logger.add(sys.stderr)


class TestConfigureLogging:
    """Handlers console et fichier JSON."""

    def test_json_file_is_written(self, records, log_file):
        logger.info("Clip ajoute")
        logger.complete()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        payload = json.loads(lines[-1])
        assert payload["record"]["message"] == "Clip ajoute"
        assert payload["record"]["extra"]["root"] == NO_SESSION

    def test_default_root_outside_session(self, records):
        logger.info("hors session")

        assert records[-1]["extra"]["root"] == NO_SESSION


class TestSanitizeRecord:
    """Les valeurs utilisateur ne peuvent pas forger de fausses lignes."""

    def test_message_control_characters_are_removed(self, records):
        logger.info("Clip ajoute: {path}", path="a.mp4\n2024-01-01 | ERROR | fake")

        assert records[-1]["message"] == "Clip ajoute: a.mp4 2024-01-01 | ERROR | fake"

    def test_bound_values_are_sanitized(self, records):
        logger.bind(title="Drill\r\nPassing").info("x")

        assert records[-1]["extra"]["title"] == "Drill Passing"

    def test_non_string_values_are_kept(self, records):
        logger.info("Clip {clip_id}", clip_id=7)

        assert records[-1]["extra"]["clip_id"] == 7


class TestSessionContext:
    """Le dossier racine de la session accompagne chaque log."""

    def test_root_is_shortened(self, records):
        with session_context("/home/alice/nas/clips/drills"):
            logger.info("dans la session")
        logger.info("apres la session")

        assert records[-2]["extra"]["root"] == ".../nas/clips/drills"
        assert records[-1]["extra"]["root"] == NO_SESSION

    def test_session_logs_carry_root(self, records, mock_file_system, mock_catalog, normalizer):
        session = ReconciliationSession(
            root_folder="/clips",
            scanner=FileScanner(mock_file_system),
            reconciler=Reconciler(normalizer),
            catalog=mock_catalog,
            executor=MagicMock(spec=SyncExecutor),
        )

        session.preview()

        session_records = [r for r in records if r["name"] == "cliporg.services.reconciliation"]
        assert session_records
        assert {r["extra"]["root"] for r in session_records} == {"/clips"}
