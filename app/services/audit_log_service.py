from typing import Optional, List
from fastapi import Request
from sqlalchemy.orm import Session
from sqlalchemy import asc
from app.models.audit_log import AuditLog


def request_context(request: Request) -> dict:
    """Caller details pulled from the request for an audit entry."""
    return {
        "ip_address": request.headers.get("x-forwarded-for")
        or (request.client.host if request.client else None),
        "user_agent": request.headers.get("user-agent"),
        "request_method": request.method,
        "request_path": request.url.path,
    }


class AuditLogService:
    """Central service for creating and querying audit logs"""

    def create_log(
        self,
        db: Session,
        action: str,
        resource_type: str,
        resource_id: Optional[int] = None,
        user_id: Optional[int] = None,
        status: str = "success",
        status_code: Optional[int] = None,
        error_message: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        request_method: Optional[str] = None,
        request_path: Optional[str] = None,
    ) -> AuditLog:
        log = AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            status=status,
            status_code=status_code,
            error_message=error_message,
            ip_address=ip_address,
            user_agent=user_agent,
            request_method=request_method,
            request_path=request_path,
        )

        db.add(log)
        try:
            db.commit()
            db.refresh(log)
        except Exception:
            db.rollback()
            raise
        return log

    def get_resource_history(
        self, db: Session, resource_type: str, resource_id: int
    ) -> List[AuditLog]:
        """Get complete change history for a resource"""
        return (
            db.query(AuditLog)
            .filter(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == resource_id,
            )
            .order_by(asc(AuditLog.timestamp), asc(AuditLog.id))
            .all()
        )
