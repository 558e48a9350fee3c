from __future__ import annotations

import json
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class User(BaseModel):
    username: str
    password: str

    def to_json(self) -> bytes:
        return self.model_dump_json(indent=2).encode("utf-8")


class Bearer(BaseModel):
    token: str


class Gig(BaseModel):
    """A gig as the server describes it.

    Only a few fields are known; anything else the server sends is kept
    as-is so it can be handed back unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2).encode("utf-8")


_GIG_LIST = TypeAdapter(list[Gig])


def decode_bearer(content: bytes) -> Bearer:
    return Bearer.model_validate_json(content)


def decode_gigs(content: bytes, allow_single: bool = False) -> list[Gig]:
    # ValidationError and JSONDecodeError are both ValueError
    data = json.loads(content)
    if allow_single and isinstance(data, dict):
        data = [data]
    return _GIG_LIST.validate_python(data)
