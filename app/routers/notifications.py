from typing import List

from fastapi import APIRouter

from app.dependencies import db_dependency, user_dependency
from app.models.notification import Notification
from app.schemas.notification import MarkReadBody, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/", response_model=List[NotificationResponse])
def list_notifications(db: db_dependency, user: user_dependency):
    return (
        db.query(Notification)
        .filter(Notification.user_id == user["id"])
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


@router.patch("/read")
def mark_read(body: MarkReadBody, db: db_dependency, user: user_dependency):
    if not body.ids:
        return {"ok": False, "updated": 0}
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user["id"], Notification.id.in_(body.ids))
        .update({"is_read": True}, synchronize_session=False)
    )
    db.commit()
    return {"ok": True, "updated": updated}
