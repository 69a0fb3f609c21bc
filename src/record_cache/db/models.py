from __future__ import annotations

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

# SQLite only auto-assigns ids for a plain INTEGER primary key.
IdType = BigInteger().with_variant(Integer(), "sqlite")


class UserRow(Base):
    """Durable row behind a Record. ``password`` holds the credential hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[str] = mapped_column(Text, nullable=False, default="")
    password: Mapped[str] = mapped_column(Text, nullable=False, default="")
