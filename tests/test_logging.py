import logging

import src.mavericks as mavericks


def test_llm_channel_level_can_differ_from_package(monkeypatch):
    monkeypatch.setenv("MAVERICKS_LOG_LEVEL", "warning")
    monkeypatch.setenv("MAVERICKS_LLM_LOG_LEVEL", "DEBUG")
    mavericks._configure_logging()
    try:
        assert logging.getLogger("mavericks").level == logging.WARNING
        assert logging.getLogger("mavericks.llm").level == logging.DEBUG
    finally:
        monkeypatch.delenv("MAVERICKS_LOG_LEVEL")
        monkeypatch.delenv("MAVERICKS_LLM_LOG_LEVEL")
        mavericks._configure_logging()


def test_unknown_level_falls_back_and_handler_is_not_duplicated(monkeypatch):
    monkeypatch.setenv("MAVERICKS_LOG_LEVEL", "chatty")
    mavericks._configure_logging()
    mavericks._configure_logging()
    try:
        logger = logging.getLogger("mavericks")
        assert logger.level == logging.INFO
        assert logging.getLogger("mavericks.llm").level == logging.INFO
        assert sum(1 for h in logger.handlers if getattr(h, "_mavericks", False)) == 1
    finally:
        monkeypatch.delenv("MAVERICKS_LOG_LEVEL")
        mavericks._configure_logging()
