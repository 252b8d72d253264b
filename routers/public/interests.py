from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from models.db import get_db
from schemas.interests import InterestSchema
from controllers.interests import _get_all_interest_options

router = APIRouter(tags=["Interests"])

# API ENDPOINTS
@router.get("/interests", response_model=List[InterestSchema])
def get_all_interest_options(db: Session = Depends(get_db)):
    return _get_all_interest_options(db=db)
