import uuid
from datetime import timedelta
import jwt
from passlib.context import CryptContext
from app.utility.errors import AuthenticationError
from app.utility.time import utc_now

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # unknown or malformed hash
        return False


def _sign(claims: dict, secret: str, expires_in: int) -> str:
    now = utc_now()
    payload = dict(claims)
    payload.update({
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def sign_access_token(user, secret: str, expires_in: int) -> str:
    return _sign(
        {
            "_id": user.id,
            "email": user.email,
            "username": user.username,
            "fullName": user.full_name,
        },
        secret,
        expires_in,
    )


def sign_refresh_token(user_id: int, secret: str, expires_in: int) -> str:
    return _sign({"_id": user_id}, secret, expires_in)


def decode_token(token: str, secret: str) -> dict:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if payload.get("_id") is None:
        raise AuthenticationError("Invalid token")
    return payload
