import logging
from typing import Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, SelfFavoriteError
from app.models.favorite import Favorite, FavoritableType
from app.models.post import Post
from app.models.user import User

logger = logging.getLogger(__name__)

_TARGET_MODELS = {
    FavoritableType.POST: Post,
    FavoritableType.USER: User,
}


class FavoriteService:
    """Add, remove and list a user's favorites.

    Every operation is scoped to ``actor_id``. A favorite that belongs to
    someone else is indistinguishable from one that does not exist.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find(
        self, actor_id: int, favoritable_type: FavoritableType, favoritable_id: int
    ):
        return (
            self.db.query(Favorite)
            .filter(
                Favorite.user_id == actor_id,
                Favorite.favoritable_type == favoritable_type.value,
                Favorite.favoritable_id == favoritable_id,
            )
            .first()
        )

    def _ensure_target_exists(
        self, favoritable_type: FavoritableType, favoritable_id: int
    ):
        model = _TARGET_MODELS[favoritable_type]
        if self.db.get(model, favoritable_id) is None:
            raise NotFoundError(f"{model.__name__} not found")

    def _ensure_actor_exists(self, actor_id: int):
        # A token can outlive its user row
        if self.db.get(User, actor_id) is None:
            raise NotFoundError("User not found")

    def add_favorite(
        self, actor_id: int, favoritable_type: FavoritableType, favoritable_id: int
    ) -> Favorite:
        return self.get_or_create_favorite(actor_id, favoritable_type, favoritable_id)[0]

    def get_or_create_favorite(
        self, actor_id: int, favoritable_type: FavoritableType, favoritable_id: int
    ) -> Tuple[Favorite, bool]:
        """Like ``add_favorite``, but also reports whether a row was inserted."""
        if favoritable_type == FavoritableType.USER and favoritable_id == actor_id:
            raise SelfFavoriteError()

        self._ensure_actor_exists(actor_id)
        self._ensure_target_exists(favoritable_type, favoritable_id)

        # Idempotent: return existing
        existing = self._find(actor_id, favoritable_type, favoritable_id)
        if existing:
            return existing, False

        fav = Favorite(
            user_id=actor_id,
            favoritable_type=favoritable_type.value,
            favoritable_id=favoritable_id,
        )
        self.db.add(fav)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with an identical insert; the unique constraint kept one row
            self.db.rollback()
            existing = self._find(actor_id, favoritable_type, favoritable_id)
            if existing is None:
                # Actor or target deleted mid-request
                self._ensure_actor_exists(actor_id)
                self._ensure_target_exists(favoritable_type, favoritable_id)
                raise
            return existing, False
        self.db.refresh(fav)
        logger.debug(
            "Favorite created",
            extra={
                "favorite_id": fav.id,
                "user_id": actor_id,
                "favoritable_type": favoritable_type.value,
                "favoritable_id": favoritable_id,
            },
        )
        return fav, True

    def remove_favorite(
        self, actor_id: int, favoritable_type: FavoritableType, favoritable_id: int
    ) -> None:
        deleted = (
            self.db.query(Favorite)
            .filter(
                Favorite.user_id == actor_id,
                Favorite.favoritable_type == favoritable_type.value,
                Favorite.favoritable_id == favoritable_id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if not deleted:
            raise NotFoundError("Favorite not found")

    def list_favorites(self, actor_id: int) -> Dict[str, List[Favorite]]:
        rows = (
            self.db.query(Favorite)
            .filter(Favorite.user_id == actor_id)
            .order_by(Favorite.id)
            .all()
        )
        grouped: Dict[str, List[Favorite]] = {"posts": [], "users": []}
        for fav in rows:
            if fav.favoritable_type == FavoritableType.POST:
                grouped["posts"].append(fav)
            elif fav.favoritable_type == FavoritableType.USER:
                grouped["users"].append(fav)
        return grouped

    def delete_favorites_of(
        self, favoritable_type: FavoritableType, favoritable_id: int
    ) -> int:
        """Drop every favorite pointing at a target that is being deleted.

        Does not commit; the caller owns the transaction.
        """
        return (
            self.db.query(Favorite)
            .filter(
                Favorite.favoritable_type == favoritable_type.value,
                Favorite.favoritable_id == favoritable_id,
            )
            .delete(synchronize_session=False)
        )
