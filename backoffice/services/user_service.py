from sqlalchemy.orm import Session

from backoffice.data.database import atomic
from backoffice.data.models.user import UserModel
from backoffice.domain.errors import DuplicateError, NotFoundError
from backoffice.domain.schemas import UserCreate, UserRead
from backoffice.repos.user_repo import UserRepo


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        with atomic(self.db):
            if self.repo.find_by_email(payload.email):
                raise DuplicateError("user", "email")

            created = self.repo.add_user(
                UserModel(
                    email=payload.email,
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                )
            )
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("user", user_id)
        return UserRead.model_validate(user)
