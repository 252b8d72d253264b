import logging
from typing import Dict, Any, List

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException

from controllers.user import _user_exists

log = logging.getLogger(__name__)


def _get_all_interest_options(db: Session) -> List[Dict[str, Any]]:
    try:
        rows = db.execute(text("SELECT * FROM interests ORDER BY name ASC")).mappings().all()
    except SQLAlchemyError:
        log.exception("Error fetching interests")
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return [dict(row) for row in rows]


def _get_user_interests(uid: str, db: Session) -> List[Dict[str, Any]]:
    if not _user_exists(uid=uid, db=db):
        raise HTTPException(status_code=404, detail=f"User with id '{uid}' does not exist!")

    stmt = text("""
        SELECT i.*
        FROM user_interests ui
        JOIN interests i ON i.id = ui.interest_id
        WHERE ui.uid = :uid
        ORDER BY i.name ASC
    """)
    rows = db.execute(stmt, {"uid": uid}).mappings().all()
    return [dict(row) for row in rows]


def _link_user_interests(uid: str, interest_ids: List[str], db: Session):
    """Insert one (uid, interest_id) row per id. Pairs that already exist are skipped."""
    stmt = text("""
        INSERT INTO user_interests (uid, interest_id)
        VALUES (:uid, :interest_id)
        ON CONFLICT (uid, interest_id) DO NOTHING
    """)
    db.execute(stmt, [{"uid": uid, "interest_id": interest_id} for interest_id in interest_ids])
