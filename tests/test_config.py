import logging

import pytest

from binbreak import config
from binbreak.log import LOGGER_NAME, setup_logging


def test_defaults_give_thirty_fps() -> None:
    cfg = config.parse_config([])
    assert cfg.fps == 30
    assert cfg.target_frame_duration == pytest.approx(0.033)
    assert cfg.frame_duration == pytest.approx(0.05)
    assert cfg.log_file is None


def test_flags_are_clamped() -> None:
    cfg = config.parse_config(["--fps", "500", "--dwell", "-3", "--frame-ms", "0", "--start-paused"])
    assert cfg.fps == 120
    assert cfg.dwell_seconds == 0.0
    assert cfg.frame_ms == 1
    assert cfg.start_paused is True


def test_unknown_banner_font_falls_back() -> None:
    cfg = config.parse_config(["--banner-font", "definitely-not-a-font"])
    assert cfg.banner_font == "standard"


def test_logging_writes_to_the_requested_file(tmp_path) -> None:
    path = tmp_path / "binbreak.log"
    stream = setup_logging(str(path))
    try:
        logging.getLogger(f"{LOGGER_NAME}.app").info("state Start -> Playing")
    finally:
        stream.close()
        setup_logging(None)

    assert "state Start -> Playing" in path.read_text(encoding="utf-8")


def test_logging_disabled_without_a_file() -> None:
    assert setup_logging(None) is None
    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert len(handlers) == 1 and isinstance(handlers[0], logging.NullHandler)
