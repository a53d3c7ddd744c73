"""Import activity log: record, query, summarize, and prune"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from pageimport.crud.models import ImportLog


def log_import(
    session: Session,
    file_name: str,
    page_id: Optional[int] = None,
    status: str = "success",
    message: str = "",
    ) -> ImportLog:
    """Append one log row. Flushes but does not commit."""
    entry = ImportLog(page_id=page_id, file_name=file_name, status=status, message=message)
    session.add(entry)
    session.flush()
    return entry


def get_logs(session: Session, limit: int = 50, status: Optional[str] = None) -> list[ImportLog]:
    """Most recent log rows first, optionally filtered by status."""
    query = select(ImportLog)
    if status:
        query = query.where(ImportLog.status == status)
    query = query.order_by(ImportLog.created_at.desc(), ImportLog.id.desc()).limit(limit)
    return list(session.exec(query).all())


def get_stats(session: Session) -> dict[str, int]:
    """Counts of logged imports: total, success, and error."""
    rows = session.exec(select(ImportLog.status, func.count()).group_by(ImportLog.status)).all()
    counts = {status: count for status, count in rows}
    return {
        "total": sum(counts.values()),
        "success": counts.get("success", 0),
        "error": counts.get("error", 0),
    }


def _delete_all(session: Session, rows) -> int:
    count = 0
    for row in rows:
        session.delete(row)
        count += 1
    session.flush()
    return count


def clear_old_logs(session: Session, days: int = 30) -> int:
    """Delete rows older than days. Returns count deleted."""
    cutoff = datetime.now() - timedelta(days=days)
    return _delete_all(session, session.exec(select(ImportLog).where(ImportLog.created_at < cutoff)).all())


def clear_all_logs(session: Session) -> int:
    """Delete every log row. Returns count deleted."""
    return _delete_all(session, session.exec(select(ImportLog)).all())
