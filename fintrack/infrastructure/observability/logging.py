"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from fintrack.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Route all log output through a single JSON handler on stdout"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # SQL statement logging is too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def log_budget_alerts(
    request_id: str,
    user_id: str,
    budget_count: int,
    alert_count: int,
    duration_ms: float,
) -> None:
    """Log structured alert check outcome"""
    logging.info(
        "Budget alerts evaluated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "budget_alerts",
            "budget_count": budget_count,
            "alert_count": alert_count,
            "duration_ms": duration_ms,
        },
    )


def log_calculation(request_id: str, calculator: str, computed: bool) -> None:
    """Log calculator invocation; inputs are not logged"""
    logging.debug(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "step": "calculation",
            "calculator": calculator,
            "outcome": "computed" if computed else "empty",
        },
    )
