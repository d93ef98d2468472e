from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import TtsError


class SynthesisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    options: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("options", mode="after")
    @classmethod
    def _freeze_options(cls, v):
        return MappingProxyType(dict(v))


class CacheEntry(BaseModel):
    request_id: str  # fingerprint hex digest
    data: bytes
    mime: str


class SynthesisOutcome(BaseModel):
    """Result of one synthesize-with-cache run: either an entry or an error."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    entry: Optional[CacheEntry] = None
    error: Optional[TtsError] = None
    cached: bool = False
    latency_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.entry is not None

    def unwrap(self) -> CacheEntry:
        if self.error is not None:
            raise self.error
        if self.entry is None:
            raise TtsError("Synthesis produced no result")
        return self.entry
