import logging
import json
from typing import Dict, Any, Union

from prometheus_client import Counter, Histogram, Gauge, start_http_server


# ─── Structured Logging ───
class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Splunk, etc).
    """
    def format(self, record):
        log_obj: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "process_id": record.process,
        }
        # Merge extra properties if present
        if hasattr(record, "props") and isinstance(record.props, dict):  # type: ignore
            log_obj.update(record.props)  # type: ignore

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def configure_logging(level: Union[int, str] = logging.INFO):
    """Configures the root logger to output JSON to stdout."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    # Remove existing handlers to prevent duplicate logs
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)
    root_logger.setLevel(level)


# ─── Prometheus Metrics ───
SNAPSHOT_BUILD_DURATION = Histogram(
    'agora_snapshot_build_duration_seconds',
    'Time spent building the dashboard data snapshot',
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5)
)

SNAPSHOT_BUILDS_TOTAL = Counter(
    'agora_snapshot_builds_total',
    'Total number of dashboard snapshots built'
)

GAS_POOL_USAGE_PERCENT = Gauge(
    'agora_gas_pool_usage_percent',
    'Used share of the SOL gas pool in the latest snapshot'
)

API_REQUESTS_TOTAL = Counter(
    'agora_api_requests_total',
    'Total number of API requests served',
    ['endpoint']
)


def start_metrics_server(port=9100):
    """Starts a background thread to serve Prometheus metrics."""
    try:
        start_http_server(port)
        logging.info("Metrics server started on port %d", port)
    except OSError as e:
        logging.error("Failed to start metrics server: %s", e)
