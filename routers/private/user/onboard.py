import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from models.db import get_db
from middleware.auth import auth_user
from schemas.onboarding import OnboardingSchema, OnboardingResultSchema

from controllers.onboarding import _onboard_user

log = logging.getLogger(__name__)

router = APIRouter(prefix="/onboard", tags=["User: Onboarding"])

# the body is read by onboarding_body(), so the request schema is declared here for the docs
ONBOARDING_BODY_DOCS = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": OnboardingSchema.model_json_schema(by_alias=True)},
        },
    },
}


async def onboarding_body(request: Request) -> Any:
    """Raw JSON body, or None when it is empty or not JSON (the controller turns that into a 400)"""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        log.info("Onboarding body is not valid JSON")
        return None


"""Take in the interests picked during onboarding, link them to the user and mark the user onboarded.
Auth is resolved before the body is read, and every malformed body (including non-JSON) is a 400.
"""
@router.post("", response_model=OnboardingResultSchema, openapi_extra=ONBOARDING_BODY_DOCS)
def onboard_user(uid: str = Depends(auth_user), payload: Any = Depends(onboarding_body), db: Session = Depends(get_db)):
    return _onboard_user(payload=payload, uid=uid, db=db)
