# grocery/api/deps.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import AuthenticationError
from grocery.services.lock_service import LockService
from grocery.services.payment_gateway import StripeGateway
from grocery.services.user_service import UserService

bearer = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> UserModel:
    if credentials is None:
        raise unauthorized("Missing or invalid authorization header")
    try:
        return UserService(db).user_from_token(credentials.credentials)
    except AuthenticationError as e:
        raise unauthorized(str(e))


def get_gateway() -> StripeGateway:
    return StripeGateway()


def get_lock_service() -> LockService:
    return LockService()
