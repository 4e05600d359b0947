from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from grocery.data.models.user import UserModel
from grocery.data.unit_of_work import unit_of_work
from grocery.domain.errors import AuthenticationError, ConflictError, NotFoundError
from grocery.domain.schemas import RegisterIn, LoginIn, ChangePasswordIn
from grocery.repos.user_repo import UserRepo
from grocery.services.auth import hash_password, verify_password, create_token, decode_token
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> Dict[str, Any]:
        email = payload.email.lower()
        if self.repo.get_by_email(email):
            raise ConflictError("User already exists")

        try:
            with unit_of_work(self.db):
                user = self.repo.create_user(
                    UserModel(email=email, password_hash=hash_password(payload.password))
                )
        except IntegrityError as e:
            # ten sam email zarejestrowany rownolegle
            raise ConflictError("User already exists") from e

        logger.info(f"Registered user {user.id}")
        return {"success": True}

    def login(self, payload: LoginIn) -> Dict[str, str]:
        user = self.repo.get_by_email(payload.email)
        # ten sam komunikat dla nieznanego emaila i zlego hasla
        if not user or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        return {"message": "Login successful", "token": create_token(user.id, user.email)}

    def change_password(self, user_id: int, payload: ChangePasswordIn) -> Dict[str, bool]:
        with unit_of_work(self.db):
            user = self.repo.get_user(user_id)
            if not user:
                raise NotFoundError("User not found")
            if not verify_password(payload.current_password, user.password_hash):
                raise ValueError("Current password is incorrect")
            user.password_hash = hash_password(payload.new_password)

        logger.info(f"Password changed for user {user_id}")
        return {"success": True}

    def user_from_token(self, token: str) -> UserModel:
        claims = decode_token(token)
        user = self.repo.get_user(claims.get("id")) if isinstance(claims.get("id"), int) else None
        if not user:
            raise AuthenticationError("Invalid or expired token")
        return user
