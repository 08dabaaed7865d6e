"""Tests for logger setup."""

import logging

from cryptonoise.core.log import get_logger, setup_logging


def test_namespace():
    assert get_logger('generator').name == 'cryptonoise.generator'


def test_setup_is_idempotent(tmp_path):
    setup_logging('debug', str(tmp_path / "a.log"))
    logger = setup_logging(logging.INFO)

    ours = [h for h in logger.handlers if getattr(h, '_cryptonoise', False)]
    assert len(ours) == 1
    assert logger.level == logging.INFO
