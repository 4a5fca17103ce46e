"""Tests for the dual-handler logging setup."""

import json
import logging

import pytest

from medidoc import __version__
from medidoc.logging import setup_logging
from medidoc.logging.setup import THIRD_PARTY_LEVELS


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name in THIRD_PARTY_LEVELS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_writes_json_lines_to_file(tmp_path, restore_root_logger):
    setup_logging(log_dir=str(tmp_path / "logs"))

    logging.getLogger("medidoc.test").info("extracted %d chars", 42)
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = (tmp_path / "logs" / "medidoc.log").read_text(encoding="utf-8").splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "extracted 42 chars"
    assert record["level"] == "INFO"
    assert record["component"] == "medidoc.test"
    assert "timestamp" in record
    assert record["app"] == "medidoc"
    assert record["version"] == __version__


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_root_logger):
    setup_logging(log_dir=str(tmp_path))
    setup_logging(log_dir=str(tmp_path))

    assert len(logging.getLogger().handlers) == 2


def test_quiets_transport_and_image_loggers(tmp_path, restore_root_logger):
    setup_logging(log_dir=str(tmp_path))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert not logging.getLogger("PIL.PngImagePlugin").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("medidoc.extractor").isEnabledFor(logging.DEBUG)
