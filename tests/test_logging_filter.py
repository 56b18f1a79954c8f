import logging

import pytest

from config import Settings
from utils.logging_config import SqlSelectFilter, setup_logging


def _record(msg: str, name: str = "sqlalchemy.engine.Engine") -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, "", 0, msg, None, None)


def test_filter_excludes_select_queries():
    filt = SqlSelectFilter()

    assert not filt.filter(_record("SELECT * FROM companies"))
    assert not filt.filter(_record("   select id FROM projects"))
    assert not filt.filter(_record("SELECT 1", name="sqlalchemy.engine"))


def test_filter_keeps_other_queries_and_loggers():
    filt = SqlSelectFilter()

    for query in ["INSERT INTO companies VALUES (1)", "UPDATE projects SET name='x'"]:
        assert filt.filter(_record(query))
        assert filt.filter(_record(f"   {query}"))
    assert filt.filter(_record("SELECT a partner", name="app.services.company_service"))


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_engine_selects_do_not_reach_log_file(tmp_path, restore_root_logging):
    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=False))

    engine_logger = logging.getLogger("sqlalchemy.engine.Engine")
    engine_logger.info("SELECT companies.id FROM companies")
    engine_logger.info("INSERT INTO companies (name) VALUES (?)")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = (tmp_path / "cdb.log").read_text(encoding="utf-8")
    assert "INSERT INTO companies" in text
    assert "SELECT companies.id" not in text


def test_detailed_logging_keeps_selects(tmp_path, restore_root_logging):
    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=True))

    logging.getLogger("sqlalchemy.engine.Engine").info("SELECT 1")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "SELECT 1" in (tmp_path / "cdb.log").read_text(encoding="utf-8")
