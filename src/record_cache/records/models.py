from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# ids live in a signed BIGINT column
MAX_ID = 2**63 - 1


class Record(BaseModel):
    """A user record as stored durably and cached.

    ``id`` is assigned by storage; 0 means "not persisted yet". ``password``
    always holds the credential hash once the record has been through the
    service.
    """

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: int = Field(default=0, ge=0, le=MAX_ID)
    name: str = ""
    email: str = ""
    password: str = ""


class RecordPatch(BaseModel):
    """Partial update; fields left as None are not touched."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
