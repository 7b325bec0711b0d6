import logging

import pytest

from latticad.logging_config import setup_logging
from latticad.xform import Transform


@pytest.fixture
def package_logger():
    logger = logging.getLogger("latticad")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_console(package_logger, capsys):
    logger = setup_logging(logging.WARNING)
    assert logger is package_logger
    assert len(logger.handlers) == 1

    Transform.from_inputs([1, 2, 3, 4, 5])
    out = capsys.readouterr().out
    assert "latticad.xform - WARNING" in out
    assert "5 input items" in out


def test_setup_logging_is_idempotent(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1


def test_setup_logging_closes_replaced_handlers(package_logger, tmp_path):
    setup_logging(log_file=str(tmp_path / "first.log"))
    old = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(old) == 1

    setup_logging(log_file=str(tmp_path / "second.log"))
    assert old[0] not in package_logger.handlers
    assert old[0].stream is None


def test_setup_logging_file(package_logger, tmp_path):
    log_file = tmp_path / "latticad.log"
    setup_logging(logging.INFO, log_file=str(log_file))
    assert len(package_logger.handlers) == 2

    Transform.from_inputs([1, 2, 3, 1, 0, 0, 0, 1, 0, 0, 0, 1, -1])
    for handler in package_logger.handlers:
        handler.flush()
    assert "M = -1" in log_file.read_text(encoding="utf-8")
