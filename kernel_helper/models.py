from __future__ import annotations

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .rules import MAX_BUFFER_SIZE


class LineKind(str, Enum):
    BLANK = "blank"
    CONTENT = "content"


class ConvertOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    include_blank_lines: bool = False
    immediate_directory: bool = False
    # None disables the bound
    max_line_length: Optional[int] = Field(default=MAX_BUFFER_SIZE, ge=2, examples=[MAX_BUFFER_SIZE])
    require_trailing_newline: bool = False


class ConversionReport(BaseModel):
    lines_read: int = 0
    content_lines: int = 0
    blank_lines: int = 0
    blank_lines_emitted: int = 0
    records_written: int = 0
    trailing_newline: bool = True


class ConvertedKernel(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content: str


class ConvertResponse(BaseModel):
    converted: ConvertedKernel
    report: ConversionReport


class LoadResponse(BaseModel):
    sha256: str
    encoding: str
    length: int
    content: str


class HealthResponse(BaseModel):
    ok: bool = True
