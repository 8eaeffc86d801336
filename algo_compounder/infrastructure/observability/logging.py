"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from algo_compounder.config import settings
from algo_compounder.domain.models import CycleOutcome


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
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


def log_cycle(outcome: CycleOutcome) -> None:
    """Log structured compounding cycle outcome for analysis"""
    recommendation = outcome.recommendation
    fields = {
        "step": "cycle_complete",
        "cycle": outcome.cycle,
        "balance_algos": outcome.balance,
        "tx_id": outcome.tx_id,
        "confirmed_round": outcome.confirmed_round,
        "optimum_found": recommendation.found,
        "wait_seconds": recommendation.wait_seconds,
        "wait_days": recommendation.wait_days,
    }
    if outcome.confirmed:
        logging.info("Transaction confirmed", extra=fields)
    else:
        logging.warning(f"Transaction failed: {outcome.error}", extra=fields)
