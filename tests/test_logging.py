"""Tests for context-prefixed logging."""

import logging

from vidtube.utils.logging import LogContext, get_logger


def test_prefix_and_bind(caplog):
    log = LogContext(get_logger("vidtube.tests"), user="u1")

    with caplog.at_level(logging.INFO, logger="vidtube.tests"):
        log.info("Video updated")
        log.bind(video="v1").warning("Thumbnail missing")

    assert [r.getMessage() for r in caplog.records] == [
        "[user=u1] Video updated",
        "[user=u1] [video=v1] Thumbnail missing",
    ]
    assert caplog.records[1].levelno == logging.WARNING
