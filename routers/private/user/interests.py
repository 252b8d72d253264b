from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.db import get_db
from middleware.auth import auth_user
from schemas.interests import InterestSchema

from controllers.interests import _get_user_interests

router = APIRouter(prefix="/me/interests", tags=["User: Interests"])

# API ENDPOINTS
@router.get("", response_model=List[InterestSchema])
def get_my_interests(uid: str = Depends(auth_user), db: Session = Depends(get_db)):
    return _get_user_interests(uid=uid, db=db)
