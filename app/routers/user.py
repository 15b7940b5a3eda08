from fastapi import APIRouter, status

from app.dependencies import db_dependency, user_dependency
from app.exceptions import NotFoundError
from app.models.user import User
from app.schemas.user import UserResponse, UserSummary

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", status_code=status.HTTP_200_OK, response_model=UserResponse)
def get_me(user: user_dependency, db: db_dependency):
    result = db.get(User, user["id"])
    if not result:
        raise NotFoundError("User not found")
    return result


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserSummary)
def get_user(user_id: int, db: db_dependency):
    result = db.get(User, user_id)
    if not result:
        raise NotFoundError("User not found")
    return result
