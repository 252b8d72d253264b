from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.db import get_db
from middleware.auth import auth_user
from schemas.user import UserSchema

from controllers.user import _get_my_user

router = APIRouter(prefix="/me")


"""Lets the client check the 'onboarded' flag to decide whether to show onboarding"""
@router.get("", response_model=UserSchema)
def get_my_user_info(uid: str = Depends(auth_user), db: Session = Depends(get_db)):
    return _get_my_user(uid=uid, db=db)
