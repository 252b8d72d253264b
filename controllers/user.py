from sqlalchemy.orm import Session
from sqlalchemy import text
from fastapi import HTTPException

from models.errors import RecordNotFoundError


def _placeholder_username(uid: str) -> str:
    """Temporary username until the identity provider's profile is synced"""
    return f"user_{uid[:8]}"


def _user_exists(uid: str, db: Session) -> bool:
    return bool(
        db.execute(
            text("SELECT 1 FROM users WHERE id = :id LIMIT 1"),
            {"id": uid}
        ).scalar()
    )


def _get_user_by_id(uid: str, db: Session):
    """Private helper to fetch user by ID"""
    stmt = text("""
        SELECT id, username, email, onboarded FROM users WHERE id = :uid LIMIT 1
    """)
    return db.execute(stmt, {"uid": uid}).mappings().first()


def _get_my_user(uid: str, db: Session):
    user = _get_user_by_id(uid=uid, db=db)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return dict(user)


def _ensure_user(uid: str, db: Session):
    """Create the user row on first contact; leaves an existing row untouched"""
    stmt = text("""
        INSERT INTO users (id, username, email, onboarded)
        VALUES (:id, :username, :email, :onboarded)
        ON CONFLICT (id) DO NOTHING
    """)
    db.execute(stmt, {
        "id": uid,
        "username": _placeholder_username(uid),
        "email": "",  # filled in later by profile sync
        "onboarded": False,
    })


def _set_user_onboarded(uid: str, db: Session):
    stmt = text("""
        UPDATE users
        SET onboarded = TRUE
        WHERE id = :uid
        RETURNING id
    """)
    res = db.execute(stmt, {"uid": uid}).first()
    if not res:
        raise RecordNotFoundError(f"User with id '{uid}' does not exist")
    return res
