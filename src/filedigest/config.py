"""Process-wide hashing parameters."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MIB = 1024 * 1024


class HashConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mmap_threshold: int = Field(default=10 * MIB, ge=0, description="Files larger than this are memory-mapped")
    buffer_size: int = Field(default=8 * MIB, gt=0, description="Scratch buffer size for sequential reads")
    alignment: int = Field(default=4096, gt=0, description="Required alignment of the scratch buffer")
    allow_empty: bool = Field(default=False, description="Digest zero-length files instead of rejecting them")

    @field_validator("alignment")
    @classmethod
    def _validate_alignment(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError("alignment must be a power of two")
        return value

    @model_validator(mode="after")
    def _validate_buffer_size(self) -> "HashConfig":
        if self.buffer_size % self.alignment:
            raise ValueError("buffer_size must be a multiple of alignment")
        return self


CONFIG = HashConfig()

__all__ = ["CONFIG", "HashConfig", "MIB"]
