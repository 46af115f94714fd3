import logging
from datetime import datetime, timezone, timedelta

from core.config import settings

class OffsetFormatter(logging.Formatter):
    def __init__(self, fmt: str, utc_offset_hours: int = 0, label: str = "UTC") -> None:
        super().__init__(fmt=fmt)
        self.tz = timezone(timedelta(hours=utc_offset_hours))
        self.label = label

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.astimezone(self.tz).strftime(f"%Y-%m-%d %H:%M:%S {self.label}")

    def format(self, record: logging.LogRecord) -> str:
        # Extract just the module name from the dotted path
        record.name = record.name.split('.')[-1]
        return super().format(record)

def setup_logging() -> None:
    formatter = OffsetFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s",
        utc_offset_hours=settings.log_utc_offset_hours,
        label=settings.log_timezone_label
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Remove existing handlers and add our custom handler
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
