import logging
from typing import Any, List

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException
from pydantic import ValidationError

from controllers.interests import _link_user_interests
from controllers.user import _ensure_user, _set_user_onboarded
from models.db import transaction
from models.errors import InvalidReferenceError, PersistenceError, RecordNotFoundError
from schemas.onboarding import OnboardingSchema

log = logging.getLogger(__name__)


def _parse_interest_ids(payload: Any, uid: str) -> List[str]:
    """Validate the onboarding body. Duplicate ids are collapsed, order kept."""
    try:
        body = OnboardingSchema.model_validate(payload)
    except ValidationError as e:
        log.info("Onboarding rejected for %s: %d payload errors", uid, e.error_count())
        raise HTTPException(
            status_code=400,
            detail="Bad Request: interestIds must be a non-empty array of strings",
        )
    return list(dict.fromkeys(body.interest_ids))


def _onboard_user(payload: Any, uid: str, db: Session):
    """
    Link the user to the chosen interests and flag them as onboarded.

    The user row is created on first contact inside the same transaction as the
    links and the flag update, so either all three land or none do.
    """
    interest_ids = _parse_interest_ids(payload, uid)

    try:
        with transaction(db):
            _ensure_user(uid=uid, db=db)
            _link_user_interests(uid=uid, interest_ids=interest_ids, db=db)
            _set_user_onboarded(uid=uid, db=db)
        # no-op unless the block ran as a SAVEPOINT inside an already open transaction
        db.commit()
    except RecordNotFoundError:
        # user row vanished between upsert and update; identity provider and DB are out of sync
        log.warning("Onboarding failed for %s: user record not found", uid)
        raise HTTPException(status_code=404, detail="User record not found in DB. Sync issue?")
    except InvalidReferenceError:
        log.warning("Onboarding failed for %s: invalid interest ids %s", uid, interest_ids)
        raise HTTPException(status_code=400, detail="Bad Request: One or more interest IDs are invalid")
    except (PersistenceError, SQLAlchemyError):
        log.exception("Onboarding failed for %s", uid)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    log.info("User %s onboarded with %d interests", uid, len(interest_ids))
    return {"success": True}
