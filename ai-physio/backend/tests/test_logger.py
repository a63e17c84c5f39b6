from loguru import logger

from core.logger import setup_logger


def test_file_sink_records_the_bound_path(tmp_path):
    log_file = tmp_path / "logs" / "api.log"
    setup_logger(level="INFO", log_file=str(log_file))
    try:
        with logger.contextualize(path="/api/orchestrate"):
            logger.info("turn handled")
        logger.info("outside a request")
    finally:
        setup_logger(level="INFO")

    lines = log_file.read_text().splitlines()
    assert any("/api/orchestrate" in l and "turn handled" in l for l in lines)
    assert any(" | - | " in l and "outside a request" in l for l in lines)


def test_level_filters_file_sink(tmp_path):
    log_file = tmp_path / "api.log"
    setup_logger(level="WARNING", log_file=str(log_file))
    try:
        logger.info("quiet")
        logger.warning("loud")
    finally:
        setup_logger(level="INFO")

    text = log_file.read_text()
    assert "loud" in text
    assert "quiet" not in text
