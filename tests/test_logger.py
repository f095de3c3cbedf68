import io

from bulletgrid.logger import Logger, get_logger


def test_logger_info_output():
    buf = io.StringIO()
    logger = get_logger("test")
    logger.stream = buf  # type: ignore
    logger.info("Hello", "World")
    out = buf.getvalue()
    assert "INFO" in out and "test: Hello World" in out


def test_logger_respects_min_level():
    buf = io.StringIO()
    logger = Logger("quiet", stream=buf, min_level=30)
    logger.debug("hidden")
    logger.info("hidden")
    logger.warn("shown")
    logger.error("also shown")
    out = buf.getvalue()
    assert "hidden" not in out
    assert "WARN" in out and "ERROR" in out


def test_logger_survives_closed_stream():
    buf = io.StringIO()
    logger = Logger("closed", stream=buf, min_level=0)
    buf.close()
    logger.error("nobody listening")
