from __future__ import annotations

from fastapi_users.password import PasswordHelper
from pwdlib.exceptions import UnknownHashError

_helper = PasswordHelper()


def hash_password(plain: str) -> str:
    """Hash ``plain`` for storage. Every value is hashed, whatever it looks like."""
    return _helper.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        verified, _ = _helper.verify_and_update(plain, hashed)
    except UnknownHashError:
        return False
    return verified


__all__ = ["hash_password", "verify_password"]
