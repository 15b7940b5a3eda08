from typing import List

from fastapi import APIRouter, Query, Request, Response
from starlette import status

from app.dependencies import db_dependency, user_dependency
from app.jobs.send_favorites_notification import send_favorites_notification
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.audit_log_service import AuditLogService, request_context
from app.services.job_queue import job_queue
from app.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=List[PostResponse])
def get_posts(
    db: db_dependency,
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(
        100, ge=1, le=1000, description="Maximum number of records to return"
    ),
):
    return PostService(db).get_posts(skip=skip, limit=limit)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(db: db_dependency, post_id: int):
    return PostService(db).get_post(post_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    db: db_dependency,
    post_request: PostCreate,
    current_user: user_dependency,
    request: Request,
):
    post = PostService(db).create_post(post_request, current_user["id"])
    # Followers are notified off the request path, once the post is committed
    job_queue.dispatch(send_favorites_notification, post.id, current_user["id"])
    AuditLogService().create_log(
        db=db,
        action="post.create",
        resource_type="post",
        resource_id=post.id,
        user_id=current_user["id"],
        status="success",
        status_code=status.HTTP_201_CREATED,
        **request_context(request),
    )
    return post


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    db: db_dependency,
    post_id: int,
    post_request: PostUpdate,
    current_user: user_dependency,
    request: Request,
):
    post = PostService(db).update_post(post_id, post_request, current_user["id"])
    AuditLogService().create_log(
        db=db,
        action="post.update",
        resource_type="post",
        resource_id=post.id,
        user_id=current_user["id"],
        status="success",
        status_code=status.HTTP_200_OK,
        **request_context(request),
    )
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    db: db_dependency, post_id: int, current_user: user_dependency, request: Request
):
    PostService(db).delete_post(post_id, current_user["id"])
    AuditLogService().create_log(
        db=db,
        action="post.delete",
        resource_type="post",
        resource_id=post_id,
        user_id=current_user["id"],
        status="success",
        status_code=status.HTTP_204_NO_CONTENT,
        **request_context(request),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
