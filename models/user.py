# models/user.py
from sqlalchemy import Column, Integer, String, DateTime

from models.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), nullable=False, unique=True, index=True)

    # werkzeug salted hash string ("method$salt$hash"), never the plaintext
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=utcnow)
