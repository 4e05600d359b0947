# grocery/services/auth.py
from datetime import datetime, timezone, timedelta
from typing import Any, Dict

import bcrypt
import jwt

from grocery.domain.errors import AuthenticationError
from grocery.utils.settings import JWT_SECRET, JWT_EXPIRES_SECONDS, BCRYPT_ROUNDS

JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # uszkodzony hash albo haslo > 72 bajty
        return False


def create_token(user_id: int, email: str, expires_in: int = JWT_EXPIRES_SECONDS) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid or expired token") from e
