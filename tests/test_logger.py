"""测试日志配置和日志输出"""

import logging
from contextlib import contextmanager

import pytest

from record_filter import InvalidPredicateArguments, field_value
from record_filter.utils.logger import setup_logger


@contextmanager
def bare_root_logger():
    """在测试体内临时清空 root logger 的 handler，退出时原样恢复

    pytest 在测试开始时才挂上自己的捕获 handler，所以必须在测试体内清空。
    """
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    root_logger.handlers.clear()
    try:
        yield root_logger
    finally:
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)


class TestSetupLogger:
    def test_configures_stderr_handler(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        with bare_root_logger() as root_logger:
            setup_logger()

            assert len(root_logger.handlers) == 1
            handler = root_logger.handlers[0]
            assert type(handler) is logging.StreamHandler
            assert root_logger.level == logging.DEBUG
            assert "%(levelname)-7s" in handler.formatter._fmt

    def test_no_duplicate_handlers(self):
        with bare_root_logger() as root_logger:
            setup_logger()
            setup_logger()
            assert len(root_logger.handlers) == 1

    def test_unknown_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with bare_root_logger() as root_logger:
            setup_logger()
            assert root_logger.level == logging.INFO

    def test_existing_handlers_left_alone(self):
        """root logger 已有 handler 时不再添加"""
        root_logger = logging.getLogger()
        before = root_logger.handlers[:]
        setup_logger()
        assert root_logger.handlers == before


class TestLogOutput:
    def test_validation_failure_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="record-filter"):
            with pytest.raises(InvalidPredicateArguments):
                field_value("v").between_incl(5, 1)
        assert "[Validate:Range] Inverted" in caplog.text

    def test_bulk_summary_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="record-filter"):
            field_value("v").equals(1).evaluate_all([{"v": 1}, {"v": 2}])
        assert "[Evaluate:Bulk] 1 hits, 1 misses" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
