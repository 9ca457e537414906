from sqlalchemy.orm import Session
from fiscal_ledger.models.audit_log import AuditLog


def log_event(
    s: Session,
    username: str,
    action: str,
    collection: str,
    record_id: int | None = None,
    details: dict | None = None,
):
    row = AuditLog(
        username=username,
        action=action,
        collection=collection,
        record_id=record_id,
        details=details,
    )
    s.add(row)
    s.commit()
    return row
