"""Import users from a JSON endpoint.

The endpoint must return a list of ``{"name": ..., "email": ...}`` objects.
The first ``limit`` rows are upserted by email; every imported user gets a
fresh random password, so they have to reset it before logging in.

    postboard-import-users --url https://example.com/users --limit 10

Missing arguments are prompted for.
"""

import argparse
import logging
import random
import sys

import requests
from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.models.user import User
from app.services.auth_service import get_password_hash
from app.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

SUCCESS = 0
FAILURE = 1


def fetch_users(url: str) -> list:
    """GET ``url`` and return its JSON list, or [] if there is nothing usable."""
    try:
        response = requests.get(url, timeout=settings.IMPORT_HTTP_TIMEOUT)
    except requests.RequestException as exc:
        logger.warning(
            "User import request failed", extra={"url": url, "error": str(exc)}
        )
        return []
    if not response.ok:
        logger.warning(
            "User import request returned an error",
            extra={"url": url, "status_code": response.status_code},
        )
        return []
    try:
        data = response.json()
    except ValueError:
        return []
    return data if isinstance(data, list) else []


def upsert_users(db: Session, rows: list) -> int:
    imported = 0
    # Sessions don't autoflush, so rows added in this batch are tracked here
    pending = {}
    for row in rows:
        email = row.get("email") if isinstance(row, dict) else None
        if not email:
            logger.warning("Skipping user row without an email")
            continue
        password_hash = get_password_hash(str(random.randint(100000, 999999)))
        user = pending.get(email) or db.query(User).filter(User.email == email).first()
        if user:
            user.name = row.get("name") or user.name
            user.password_hash = password_hash
        else:
            user = User(
                name=row.get("name") or email,
                email=email,
                password_hash=password_hash,
            )
            db.add(user)
        pending[email] = user
        imported += 1
    db.commit()
    return imported


def _parse_limit(raw) -> int:
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


def run(url: str, limit) -> int:
    if not url:
        print("URL is required.", file=sys.stderr)
        return FAILURE

    limit = _parse_limit(limit)
    if limit <= 0:
        print("Enter a valid limit.", file=sys.stderr)
        return FAILURE

    rows = fetch_users(url)
    if not rows:
        print("No users found at the provided URL.", file=sys.stderr)
        return FAILURE

    db = SessionLocal()
    try:
        imported = upsert_users(db, rows[:limit])
    finally:
        db.close()

    logger.info("Users imported", extra={"url": url, "count": imported})
    print(f"{imported} Users imported successfully.")
    return SUCCESS


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import users from a JSON URL.")
    parser.add_argument("--url", help="Endpoint returning a JSON list of users.")
    parser.add_argument("--limit", help="Maximum number of users to import.")
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    url = args.url if args.url is not None else input("Enter the URL: ").strip()
    if not url:
        return run(url, args.limit)
    limit = args.limit if args.limit is not None else input("Enter the limit: ")
    return run(url, limit)


if __name__ == "__main__":
    sys.exit(main())
