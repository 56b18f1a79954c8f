"""Logging setup shared by the web service and maintenance scripts."""

import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

from config import Settings, get_settings


class SqlSelectFilter(logging.Filter):
    """Hides SELECT statements echoed by SQLAlchemy.

    Installed on the handlers: logger filters are skipped for records that
    propagate from the ``sqlalchemy.engine.Engine`` child logger.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - short doc
        """True unless an SQLAlchemy engine record starts with ``SELECT``."""
        if not record.name.startswith("sqlalchemy.engine"):
            return True
        return not str(record.getMessage()).lstrip().upper().startswith("SELECT")


def setup_logging(settings: Settings | None = None) -> None:
    """Configure console output and the rotating ``cdb.log`` file."""
    settings = settings or get_settings()
    logs_dir = Path(settings.log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, settings.log_level, logging.INFO)
    if settings.detailed_logging:
        level = logging.DEBUG

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_h = RotatingFileHandler(
        logs_dir / "cdb.log",
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_h.setFormatter(fmt)
    file_h.setLevel(level)

    console_h = logging.StreamHandler()
    console_h.setFormatter(fmt)
    console_h.setLevel(level)

    logging.basicConfig(
        level=level,
        handlers=[file_h, console_h],
        force=True,
    )

    logging.getLogger().setLevel(level)

    if not settings.detailed_logging:
        sql_filter = SqlSelectFilter()
        file_h.addFilter(sql_filter)
        console_h.addFilter(sql_filter)
