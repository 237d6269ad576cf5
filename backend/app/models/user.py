"""
AquaGuard Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Why:   Holds the credentials checked by POST /api/login.

Security:
    Only a salted hash of the password is stored (werkzeug
    generate_password_hash). The hash never leaves the service layer.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """An account allowed to sign in. Seeded at startup, never mutated."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
