from fastapi import APIRouter, Request, Response, status

from app.dependencies import db_dependency, user_dependency
from app.models.favorite import FavoritableType
from app.schemas.favorite import FavoriteListResponse, render_favorite
from app.services.audit_log_service import AuditLogService, request_context
from app.services.favorite_service import FavoriteService

router = APIRouter(tags=["favorites"])


def _add(
    db, current_user: dict, http_req: Request, kind: FavoritableType, target_id: int
) -> Response:
    fav, created = FavoriteService(db).get_or_create_favorite(
        current_user["id"], kind, target_id
    )
    if created:
        AuditLogService().create_log(
            db=db,
            action="favorite.create",
            resource_type="favorite",
            resource_id=fav.id,
            user_id=current_user["id"],
            status="success",
            status_code=status.HTTP_201_CREATED,
            **request_context(http_req),
        )
    return Response(status_code=status.HTTP_201_CREATED)


def _remove(
    db, current_user: dict, http_req: Request, kind: FavoritableType, target_id: int
) -> Response:
    FavoriteService(db).remove_favorite(current_user["id"], kind, target_id)
    AuditLogService().create_log(
        db=db,
        action="favorite.delete",
        resource_type="favorite",
        resource_id=None,
        user_id=current_user["id"],
        status="success",
        status_code=status.HTTP_204_NO_CONTENT,
        **request_context(http_req),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/favorites", response_model=FavoriteListResponse)
def list_my_favorites(db: db_dependency, current_user: user_dependency):
    grouped = FavoriteService(db).list_favorites(current_user["id"])
    return {
        "posts": [render_favorite(fav) for fav in grouped["posts"]],
        "users": [render_favorite(fav) for fav in grouped["users"]],
    }


@router.post("/posts/{post_id}/favorites", status_code=status.HTTP_201_CREATED)
def add_post_favorite(
    post_id: int, db: db_dependency, current_user: user_dependency, http_req: Request
):
    return _add(db, current_user, http_req, FavoritableType.POST, post_id)


@router.delete("/posts/{post_id}/favorites", status_code=status.HTTP_204_NO_CONTENT)
def remove_post_favorite(
    post_id: int, db: db_dependency, current_user: user_dependency, http_req: Request
):
    return _remove(db, current_user, http_req, FavoritableType.POST, post_id)


@router.post("/users/{user_id}/favorites", status_code=status.HTTP_201_CREATED)
def add_user_favorite(
    user_id: int, db: db_dependency, current_user: user_dependency, http_req: Request
):
    return _add(db, current_user, http_req, FavoritableType.USER, user_id)


@router.delete("/users/{user_id}/favorites", status_code=status.HTTP_204_NO_CONTENT)
def remove_user_favorite(
    user_id: int, db: db_dependency, current_user: user_dependency, http_req: Request
):
    return _remove(db, current_user, http_req, FavoritableType.USER, user_id)
