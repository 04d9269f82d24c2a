import logging
from buoyancy_sim.logging_config import setup_logging


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "sim.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    logger = setup_logging(logging.DEBUG, str(log_file))

    assert logger.name == "buoyancy_sim"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("buoyancy_sim.scene").debug("hello from the scene")
    for h in logger.handlers:
        h.flush()
    assert "hello from the scene" in log_file.read_text(encoding="utf-8")

    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


def test_setup_logging_closes_replaced_handlers(tmp_path):
    logger = setup_logging(logging.INFO, str(tmp_path / "first.log"))
    old_file_handler = next(h for h in logger.handlers if isinstance(h, logging.FileHandler))
    assert old_file_handler.stream is not None

    logger = setup_logging(logging.INFO, str(tmp_path / "second.log"))

    assert old_file_handler not in logger.handlers
    assert old_file_handler.stream is None

    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
