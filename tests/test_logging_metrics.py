import json
import logging
import sys

from casper_mcp.config import CasperMcpConfig, Transport
from casper_mcp.logging_setup import JsonFormatter, configure_logging, effective_level
from casper_mcp.metrics import RECENT_DURATIONS, MetricsRecorder


def test_json_formatter_includes_extras():
    record = logging.LogRecord("casper_mcp.test", logging.WARNING, __file__, 1, "tool %s failed", ("x",), None)
    record.tool = "get_block"
    record.request_id = "req-1"
    payload = json.loads(JsonFormatter().format(record))
    assert payload == {
        "level": "WARNING",
        "message": "tool x failed",
        "name": "casper_mcp.test",
        "tool": "get_block",
        "request_id": "req-1",
    }


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        exc_info = sys.exc_info()
    record = logging.LogRecord("casper_mcp.test", logging.ERROR, __file__, 1, "failed", (), exc_info)
    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in payload["exc_info"]


def test_stdio_logging_is_quiet():
    assert effective_level(CasperMcpConfig(api_key="k", log_level="DEBUG")) == logging.WARNING
    sse = CasperMcpConfig(api_key="k", transport=Transport.SSE, log_level="DEBUG")
    assert effective_level(sse) == logging.DEBUG
    assert effective_level(CasperMcpConfig(api_key="k", transport=Transport.SSE, log_level="nonsense")) == logging.INFO


def test_configure_logging_writes_json_to_stderr():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(CasperMcpConfig(api_key="k", transport=Transport.SSE))
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_metrics_snapshot_and_reset():
    metrics = MetricsRecorder()
    metrics.incr_request()
    metrics.incr_unauthorized()
    metrics.record_tool("get_block", success=True)
    metrics.record_tool("get_block", success=False)
    metrics.record_duration("r1", 1.5)
    snapshot = metrics.snapshot()
    assert snapshot == {
        "requests": 1,
        "unauthorized": 1,
        "tool_success": {"get_block": 1},
        "tool_error": {"get_block": 1},
        "recent_request_durations_ms": {"r1": 1.5},
    }
    metrics.reset()
    assert metrics.snapshot()["requests"] == 0


def test_metrics_keep_recent_durations_only():
    metrics = MetricsRecorder()
    for index in range(RECENT_DURATIONS + 5):
        metrics.record_duration(f"r{index}", float(index))
    durations = metrics.snapshot()["recent_request_durations_ms"]
    assert len(durations) == RECENT_DURATIONS
    assert "r0" not in durations
    assert f"r{RECENT_DURATIONS + 4}" in durations
