import logging

from sqlalchemy.orm import joinedload

from app.database import SessionLocal
from app.models.favorite import Favorite, FavoritableType
from app.models.post import Post
from app.models.user import User
from app.services.notifications import NewPostNotification, notify

logger = logging.getLogger(__name__)


def send_favorites_notification(post_id: int, author_id: int) -> int:
    """
    Notify everyone who favorited ``author_id`` about their new post.

    Runs on the job queue with its own session, so it takes ids rather
    than ORM objects. Returns the number of recipients.
    """
    db = SessionLocal()
    try:
        post = db.get(Post, post_id)
        author = db.get(User, author_id)
        if post is None or author is None:
            logger.warning(
                "Skipping new post notifications, post or author is gone",
                extra={"post_id": post_id, "user_id": author_id},
            )
            return 0

        # Users who favorited the author
        favorites = (
            db.query(Favorite)
            .options(joinedload(Favorite.user))
            .filter(
                Favorite.favoritable_type == FavoritableType.USER.value,
                Favorite.favoritable_id == author.id,
            )
            .all()
        )
        if not favorites:
            return 0

        # One notification per follower
        recipients = {}
        for favorite in favorites:
            if favorite.user is not None:
                recipients.setdefault(favorite.user.id, favorite.user)

        logger.info(
            "Sending new post notifications to users who favorited this user.",
            extra={
                "post_id": post.id,
                "user_id": author.id,
                "recipient_count": len(recipients),
            },
        )

        notify(db, recipients.values(), NewPostNotification(post, author))
        return len(recipients)
    finally:
        db.close()
