from enum import Enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class FavoritableType(str, Enum):
    POST = "post"
    USER = "user"


class Favorite(Base):
    """A user's favorite of a post or of another user.

    The target is a polymorphic reference: ``favoritable_type`` names the
    kind and ``favoritable_id`` the row within it. There is no database
    foreign key on the target, so the view-only ``post`` and
    ``favorited_user`` relationships may resolve to None when the target
    row is gone.
    """

    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    favoritable_id = Column(Integer, nullable=False)
    favoritable_type = Column(String(32), nullable=False)  # FavoritableType value
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "favoritable_id",
            "favoritable_type",
            name="uq_favorites_user_favoritable",
        ),
        Index("ix_favorites_favoritable", "favoritable_id", "favoritable_type"),
    )

    # Relationships
    user = relationship("User", back_populates="favorites", foreign_keys=[user_id])
    post = relationship(
        "Post",
        primaryjoin="and_(Favorite.favoritable_type == 'post', "
        "foreign(Favorite.favoritable_id) == Post.id)",
        viewonly=True,
    )
    favorited_user = relationship(
        "User",
        primaryjoin="and_(Favorite.favoritable_type == 'user', "
        "foreign(Favorite.favoritable_id) == User.id)",
        viewonly=True,
    )

    @property
    def favoritable(self):
        if self.favoritable_type == FavoritableType.POST:
            return self.post
        if self.favoritable_type == FavoritableType.USER:
            return self.favorited_user
        return None
