from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from app.exceptions import ForbiddenError, NotFoundError
from app.models.favorite import FavoritableType
from app.models.post import Post
from app.schemas.post import PostCreate, PostUpdate
from app.services.favorite_service import FavoriteService


class PostService:

    def __init__(self, db: Session):
        self.db = db

    def create_post(self, post_data: PostCreate, user_id: int) -> Post:
        post = Post(**post_data.model_dump(), user_id=user_id)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post

    def get_posts(self, skip: int = 0, limit: int = 100):
        result = self.db.execute(
            select(Post)
            .options(joinedload(Post.user))
            .order_by(Post.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return result.scalars().all()

    def get_post(self, post_id: int) -> Post:
        post = self.db.get(Post, post_id)
        if not post:
            raise NotFoundError(f"Post with ID {post_id} not found")
        return post

    def update_post(self, post_id: int, post_data: PostUpdate, user_id: int) -> Post:
        post = self.get_post(post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You are not authorized to update this post")

        for key, value in post_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(post, key, value)

        self.db.commit()
        self.db.refresh(post)
        return post

    def delete_post(self, post_id: int, user_id: int) -> None:
        post = self.get_post(post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You are not authorized to delete this post")

        FavoriteService(self.db).delete_favorites_of(FavoritableType.POST, post.id)
        self.db.delete(post)
        self.db.commit()
