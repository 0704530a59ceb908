import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "pokedex-seed"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        base.update(_extra_fields(record))
        if record.exc_info and record.exc_info[0] is not None:
            base["exception_type"] = record.exc_info[0].__name__
            base["exception_message"] = str(record.exc_info[1])
            base["traceback"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{_timestamp(record)} | {record.levelname:<8} | {SERVICE_NAME} | {record.name} | {record.getMessage()}"
        extra = _extra_fields(record)
        if extra:
            line += " | " + " ".join(f"{k}={v}" for k, v in extra.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _safe_level(level_value: str) -> int:
    level = getattr(logging, (level_value or "WARNING").upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(json_enabled: bool = False, level_value: str = "WARNING") -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_enabled else HumanFormatter())
    root.addHandler(handler)
    root.setLevel(_safe_level(level_value))

    # Reduce verbosity of third-party noisy loggers
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
