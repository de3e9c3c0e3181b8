import json
import logging
import os
from datetime import datetime
from typing import Optional

LOGGER_NAME = "plan_guard"
JSON_LOG_FILE = "guard.jsonl"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "meta") and isinstance(record.meta, dict):
            log_entry["meta"] = record.meta
        return json.dumps(log_entry, separators=(",", ":"))


def setup_logger(
    level: str = "WARNING", log_dir: Optional[str] = None, name: str = LOGGER_NAME
) -> logging.Logger:
    """Configure the guard logger.

    Console output always goes to stderr so the report on stdout stays clean.
    The JSONL file handler is only attached when ``log_dir`` is given.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    logger.propagate = False

    # Avoid duplicate handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    ch = logging.StreamHandler()
    ch.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, JSON_LOG_FILE), encoding="utf-8")
        fh.setFormatter(JsonFormatter())
        logger.addHandler(fh)

    return logger


# Module-level logger; handlers are attached by setup_logger()
logger = logging.getLogger(LOGGER_NAME)
