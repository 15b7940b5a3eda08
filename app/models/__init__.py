# Import all models so they're registered with Base.metadata
from app.models.user import User
from app.models.post import Post
from app.models.favorite import Favorite, FavoritableType
from app.models.notification import Notification
from app.models.audit_log import AuditLog

__all__ = [
    "User",
    "Post",
    "Favorite",
    "FavoritableType",
    "Notification",
    "AuditLog",
]
