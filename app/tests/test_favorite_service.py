import pytest
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, SelfFavoriteError
from app.models.favorite import Favorite, FavoritableType
from app.services.favorite_service import FavoriteService


def test_add_favorite_is_idempotent(db_session, make_user, make_post):
    user = make_user()
    post = make_post()
    service = FavoriteService(db_session)

    first = service.add_favorite(user.id, FavoritableType.POST, post.id)
    second = service.add_favorite(user.id, FavoritableType.POST, post.id)

    assert first.id == second.id
    assert db_session.query(Favorite).count() == 1


def test_add_favorite_rejects_self(db_session, make_user):
    user = make_user()

    with pytest.raises(SelfFavoriteError) as exc_info:
        FavoriteService(db_session).add_favorite(user.id, FavoritableType.USER, user.id)

    assert exc_info.value.status_code == 400
    assert db_session.query(Favorite).count() == 0


def test_add_favorite_recovers_from_a_concurrent_insert(
    db_session, make_user, make_post, monkeypatch
):
    user = make_user()
    post = make_post()
    service = FavoriteService(db_session)
    real_find = FavoriteService._find
    calls = {"n": 0}

    def _racy_find(self, actor_id, kind, target_id):
        calls["n"] += 1
        if calls["n"] == 1:
            # Another request commits the same favorite after our existence check
            with Session(bind=self.db.get_bind()) as other:
                other.add(
                    Favorite(
                        user_id=actor_id,
                        favoritable_type=kind.value,
                        favoritable_id=target_id,
                    )
                )
                other.commit()
            return None
        return real_find(self, actor_id, kind, target_id)

    monkeypatch.setattr(FavoriteService, "_find", _racy_find)

    fav = service.add_favorite(user.id, FavoritableType.POST, post.id)

    assert fav.user_id == user.id
    assert fav.favoritable_id == post.id
    assert db_session.query(Favorite).count() == 1


def test_remove_favorite_is_scoped_to_the_actor(db_session, make_user, make_post):
    owner = make_user()
    other = make_user()
    post = make_post()
    service = FavoriteService(db_session)
    service.add_favorite(owner.id, FavoritableType.POST, post.id)

    with pytest.raises(NotFoundError):
        service.remove_favorite(other.id, FavoritableType.POST, post.id)

    assert db_session.query(Favorite).filter_by(user_id=owner.id).count() == 1


def test_favorite_can_be_recreated_after_removal(db_session, make_user):
    user = make_user()
    target = make_user()
    service = FavoriteService(db_session)

    service.add_favorite(user.id, FavoritableType.USER, target.id)
    service.remove_favorite(user.id, FavoritableType.USER, target.id)
    again = service.add_favorite(user.id, FavoritableType.USER, target.id)

    assert again.favoritable_type == FavoritableType.USER
    assert db_session.query(Favorite).count() == 1


def test_list_favorites_partitions_by_kind(db_session, make_user, make_post):
    user = make_user()
    followed = make_user()
    p1 = make_post()
    p2 = make_post()
    service = FavoriteService(db_session)
    service.add_favorite(user.id, FavoritableType.POST, p1.id)
    service.add_favorite(user.id, FavoritableType.USER, followed.id)
    service.add_favorite(user.id, FavoritableType.POST, p2.id)

    grouped = service.list_favorites(user.id)

    assert [f.favoritable_id for f in grouped["posts"]] == [p1.id, p2.id]
    assert [f.favoritable_id for f in grouped["users"]] == [followed.id]
    assert FavoriteService(db_session).list_favorites(followed.id) == {
        "posts": [],
        "users": [],
    }


def test_get_or_create_favorite_reports_new_rows(db_session, make_user, make_post):
    user = make_user()
    post = make_post()
    service = FavoriteService(db_session)

    first, created = service.get_or_create_favorite(user.id, FavoritableType.POST, post.id)
    again, created_again = service.get_or_create_favorite(
        user.id, FavoritableType.POST, post.id
    )

    assert created is True
    assert created_again is False
    assert first.id == again.id


def test_add_favorite_for_a_missing_actor_is_not_found(db_session, make_post):
    post = make_post()

    with pytest.raises(NotFoundError):
        FavoriteService(db_session).add_favorite(999, FavoritableType.POST, post.id)

    assert db_session.query(Favorite).count() == 0
