from typing import List

from pydantic import BaseModel

from app.models.favorite import Favorite, FavoritableType
from app.schemas.user import UserSummary


class FavoritedUser(BaseModel):
    id: int
    name: str | None = None


class FavoritedPost(BaseModel):
    id: int
    title: str | None = None
    body: str | None = None
    user: UserSummary | None = None


class FavoriteListResponse(BaseModel):
    posts: List[FavoritedPost] = []
    users: List[FavoritedUser] = []


def _render_user_favorite(favorite: Favorite) -> dict:
    target = favorite.favorited_user
    if target is None:
        return FavoritedUser(id=favorite.favoritable_id).model_dump()
    return FavoritedUser(id=target.id, name=target.name).model_dump()


def _render_post_favorite(favorite: Favorite) -> dict:
    post = favorite.post
    if post is None:
        return FavoritedPost(id=favorite.favoritable_id).model_dump()
    author = post.user
    return FavoritedPost(
        id=post.id,
        title=post.title,
        body=post.body,
        user=UserSummary(id=author.id, name=author.name) if author else None,
    ).model_dump()


def render_favorite(favorite: Favorite) -> dict:
    """Render a favorite as its target: {id, name} for users,
    {id, title, body, user} for posts, {} for anything else.

    A target that has since been deleted renders with its id only.
    """
    if favorite.favoritable_type == FavoritableType.USER:
        return _render_user_favorite(favorite)
    if favorite.favoritable_type == FavoritableType.POST:
        return _render_post_favorite(favorite)
    return {}
