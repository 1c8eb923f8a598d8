"""Base model for pyripe value objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RipeBaseModel(BaseModel):
    """Immutable base for results handed back to callers.

    Instances are frozen so a parsed packet or generated key pair can be
    shared between threads without copying.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
