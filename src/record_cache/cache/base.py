from __future__ import annotations

import json
from datetime import timedelta
from typing import Any, Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import CacheDecodeError, CacheEncodeError

M = TypeVar("M", bound=BaseModel)

TTL = int | float | timedelta


class CacheClient(Protocol):
    """The four cache calls RecordService relies on.

    ``get`` and ``get_and_decode`` return ``None`` for a miss and raise for a
    failure; they never do both.
    """

    async def get(self, key: str) -> Optional[str]:
        ...

    async def get_and_decode(self, key: str, model: type[M]) -> Optional[M]:
        ...

    async def set_encoded(self, key: str, value: Any, ttl: TTL) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


def ttl_seconds(ttl: TTL) -> int:
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    if seconds <= 0:
        raise ValueError(f"ttl must be positive, got {ttl!r}")
    # Redis EX takes whole seconds; never round a short TTL down to "no expiry".
    return max(1, int(seconds))


def encode(value: Any, *, key: str) -> str:
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json()
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise CacheEncodeError(f"failed to encode value: {e}", op="set_encoded", key=key) from e


def decode(raw: str | bytes, model: type[M], *, key: str) -> M:
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise CacheDecodeError(
            f"failed to decode cached {model.__name__}: {e.error_count()} error(s)",
            op="get_and_decode",
            key=key,
        ) from e
