from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.api.errors import http_error
from backoffice.data.database import get_db
from backoffice.domain.errors import OrderError
from backoffice.domain.schemas import UserCreate, UserRead
from backoffice.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.create_user(payload)
    except OrderError as e:
        raise http_error(e)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except OrderError as e:
        raise http_error(e)
