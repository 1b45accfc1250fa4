"""Trace id propagation tests."""
from loguru import logger

from datasources.logging.logger import get_logger, trace_context


class TestTraceContext:
    """Loggers created at import time pick up the trace id at log time."""

    def test_module_logger_follows_trace_context(self):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record["extra"]), level="DEBUG")
        module_logger = get_logger("mysql_repository")
        try:
            with trace_context("trace-abc"):
                module_logger.info("inside")
            module_logger.info("outside")
        finally:
            logger.remove(sink_id)

        assert records[0] == {"name": "mysql_repository", "trace_id": "trace-abc"}
        assert "trace_id" not in records[1]

    def test_logger_created_inside_trace_binds_it(self):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record["extra"]), level="DEBUG")
        try:
            with trace_context("trace-xyz"):
                scoped = get_logger("catalog_service")
            scoped.info("after the block")
        finally:
            logger.remove(sink_id)

        assert records[0]["trace_id"] == "trace-xyz"
