# grocery/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery.api.deps import get_current_user, unauthorized
from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import AuthenticationError, ConflictError, NotFoundError
from grocery.domain.schemas import RegisterIn, LoginIn, ChangePasswordIn, TokenOut, UserRead
from grocery.services.user_service import UserService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register")
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception("POST /api/register failed")
        raise HTTPException(status_code=500, detail="Failed to register")


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.login(payload)
    except AuthenticationError as e:
        raise unauthorized(str(e))
    except Exception:
        logger.exception("POST /api/login failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/change-password")
def change_password(
    payload: ChangePasswordIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.change_password(user.id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("POST /api/change-password failed")
        raise HTTPException(status_code=500, detail="Failed to change password")


@router.get("/me", response_model=UserRead)
def me(user: UserModel = Depends(get_current_user)):
    return user
