"""ProposedPatch — JSON-Patch style edits proposed by a user, agent or plugin."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PatchOp(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


class PatchSource(str, Enum):
    USER = "user"
    AGENT = "agent"
    PLUGIN = "plugin"


class JsonPatchOp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    op: PatchOp
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")


class ProposedPatch(BaseModel):
    ops: list[JsonPatchOp]
    reason: str | None = None
    source: PatchSource | None = None
