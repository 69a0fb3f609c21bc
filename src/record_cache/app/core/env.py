from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "testing": Env.TEST,
    "ci": Env.TEST,
    "production": Env.PROD,
}


def normalize_env(raw: str | None) -> Env | None:
    if not raw:
        return None
    name = raw.strip().lower()
    try:
        return Env(name)
    except ValueError:
        return ALIASES.get(name)


@cache
def get_env() -> Env:
    """APP_ENV as an Env, resolved once per process; unknown values mean LOCAL."""
    raw = os.getenv("APP_ENV")
    env = normalize_env(raw)
    if env is not None:
        return env
    if raw:
        warnings.warn(f"Unrecognized APP_ENV {raw!r}, using 'local'", RuntimeWarning, stacklevel=2)
    return Env.LOCAL


def is_prod(env: Env | None = None) -> bool:
    return (env or get_env()) is Env.PROD


def pick(*, prod, nonprod, env: Env | None = None):
    """
    Choose a value for production or for everything else.

    Example:
        level = pick(prod="INFO", nonprod="DEBUG")
    """
    return prod if is_prod(env) else nonprod
