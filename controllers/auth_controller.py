# controllers/auth_controller.py
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash
from flask import current_app

from db.database import SessionLocal
from models.user import User
from utils.auth import get_session_store
from utils.errors import DuplicateUsername, InvalidCredentials, StorageError


# ---- Pydantic models ----
class SignupSchema(BaseModel):
    username: str = Field(..., min_length=3, max_length=80)
    password: str = Field(..., min_length=6, max_length=128)


class LoginSchema(BaseModel):
    username: str = ""
    password: str = ""


# hash of a throwaway password per hash method, compared against when the username is unknown
_DUMMY_HASHES = {}


def _dummy_hash() -> str:
    method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    if method not in _DUMMY_HASHES:
        _DUMMY_HASHES[method] = generate_password_hash("not-a-real-password", method=method)
    return _DUMMY_HASHES[method]


# ---- DB helpers ----
def _find_user(session, username: str):
    return session.query(User).filter(User.username == username).first()


def sign_up(payload: dict) -> User:
    """
    Create a user with a salted password hash.
    Raises DuplicateUsername if the name is taken, pydantic.ValidationError on bad input.
    """
    validated = SignupSchema(**payload)
    method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")

    session = SessionLocal()
    try:
        if _find_user(session, validated.username):
            raise DuplicateUsername(validated.username)

        user = User(
            username=validated.username,
            password_hash=generate_password_hash(validated.password, method=method),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
    except IntegrityError:
        session.rollback()
        raise DuplicateUsername(validated.username)
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError("Could not save user") from exc
    finally:
        session.close()

    current_app.logger.info("New user signed up: %s", user.username)
    return user


def login(payload: dict) -> str:
    """
    Verify credentials and open a server-side session; returns its token.
    Unknown user and wrong password both raise InvalidCredentials.
    """
    validated = LoginSchema(**payload)

    session = SessionLocal()
    try:
        user = _find_user(session, validated.username)
    except SQLAlchemyError as exc:
        raise StorageError("Could not read user") from exc
    finally:
        session.close()

    if user is None:
        # same hashing work as a wrong password, so timing does not reveal unknown usernames
        check_password_hash(_dummy_hash(), validated.password)
        current_app.logger.info("Failed login for username=%s", validated.username)
        raise InvalidCredentials()

    if not check_password_hash(user.password_hash, validated.password):
        current_app.logger.info("Failed login for username=%s", validated.username)
        raise InvalidCredentials()

    token = get_session_store().create(user)
    current_app.logger.info("User logged in: %s", user.username)
    return token


def logout(token) -> bool:
    return get_session_store().destroy(token)
