"""Unit tests for crud/logs.py"""

from datetime import datetime, timedelta

from pageimport.crud.logs import clear_all_logs, clear_old_logs, get_logs, get_stats, log_import


def test_log_import_and_get_logs(session):
    log_import(session, "a.html", page_id=1, status="success", message="ok")
    log_import(session, "b.html", status="error", message="no_title: No title found")
    logs = get_logs(session)
    assert [e.file_name for e in logs] == ["b.html", "a.html"]


def test_get_logs_filter_and_limit(session):
    for i in range(3):
        log_import(session, f"{i}.html")
    log_import(session, "bad.html", status="error")
    assert [e.file_name for e in get_logs(session, status="error")] == ["bad.html"]
    assert len(get_logs(session, limit=2)) == 2


def test_get_stats(session):
    log_import(session, "a.html")
    log_import(session, "b.html")
    log_import(session, "c.html", status="error")
    assert get_stats(session) == {"total": 3, "success": 2, "error": 1}


def test_get_stats_empty(session):
    assert get_stats(session) == {"total": 0, "success": 0, "error": 0}


def test_clear_old_logs(session):
    old = log_import(session, "old.html")
    old.created_at = datetime.now() - timedelta(days=45)
    session.add(old)
    log_import(session, "new.html")
    assert clear_old_logs(session, days=30) == 1
    assert [e.file_name for e in get_logs(session)] == ["new.html"]


def test_clear_all_logs(session):
    log_import(session, "a.html")
    log_import(session, "b.html")
    assert clear_all_logs(session) == 2
    assert get_logs(session) == []
