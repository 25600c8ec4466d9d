"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from cube_billing.config import settings
from cube_billing.domain.models import OverdueResult
from cube_billing.domain.overdue import format_overdue_details


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_overdue_evaluation(
    request_id: str,
    rental_id: str,
    result: OverdueResult,
) -> None:
    """Log structured overdue outcome; ``details`` is the same line the calculator formats"""
    logging.info(
        "Overdue evaluation completed",
        extra={
            "request_id": request_id,
            "rental_id": rental_id,
            "step": "overdue_evaluation",
            "outcome": "overdue" if result.should_trigger_overdue else "current",
            "balance_due_cents": result.balance_due_cents,
            "days_overdue": result.days_overdue,
            "details": format_overdue_details(result),
        },
    )
