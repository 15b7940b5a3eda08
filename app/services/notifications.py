import json
import logging
import smtplib
from email.message import EmailMessage
from typing import Dict, Iterable

from sqlalchemy.orm import Session

from app.config import settings
from app.models.notification import Notification
from app.models.post import Post
from app.models.user import User

logger = logging.getLogger(__name__)


class NewPostNotification:
    """Tells a follower that a user they favorited published a post."""

    type = "new_post"

    def __init__(self, post: Post, author: User):
        self.post = post
        self.author = author

    @property
    def title(self) -> str:
        return f"{self.author.name} published a new post"

    @property
    def body(self) -> str:
        return f'{self.author.name} just posted "{self.post.title}".'

    @property
    def payload(self) -> dict:
        return {
            "post_id": self.post.id,
            "author_id": self.author.id,
            "title": self.post.title,
        }


# ---------- Email ----------
def send_email(to_email: str, subject: str, body: str):
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = to_email
    msg.set_content(body)

    with smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=10) as server:
        server.starttls()
        if settings.EMAIL_USERNAME:
            server.login(settings.EMAIL_USERNAME, settings.EMAIL_PASSWORD)
        server.send_message(msg)
    return {"sent": True}


def _deliver(db: Session, user: User, notification) -> None:
    db.add(
        Notification(
            user_id=user.id,
            type=notification.type,
            title=notification.title,
            body=notification.body,
            payload=json.dumps(notification.payload),
        )
    )
    db.flush()

    if settings.MAIL_ENABLED and user.email:
        send_email(user.email, notification.title, notification.body)
    # The row only lands once every channel succeeded
    db.commit()


def notify(db: Session, recipients: Iterable[User], notification) -> Dict[int, bool]:
    """
    Deliver ``notification`` to every recipient:
    - persists a Notification row (database channel)
    - sends an email when mail is enabled

    Recipients are independent: a failure rolls back that recipient's row,
    is logged, and the rest still get delivered. Returns {user_id: delivered}.
    """
    results: Dict[int, bool] = {}
    for user in recipients:
        try:
            _deliver(db, user, notification)
            results[user.id] = True
        except Exception:
            db.rollback()
            logger.exception(
                "Notification delivery failed",
                extra={"recipient_id": user.id, "notification_type": notification.type},
            )
            results[user.id] = False
    return results
