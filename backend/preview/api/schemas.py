from typing import Any

from pydantic import BaseModel, Field


# --- Truncate ---
class TruncateRequest(BaseModel):
    html: str
    length: int = Field(..., description="Characters, or words with byWords")
    options: dict[str, Any] = Field(default_factory=dict)

class TextTruncateRequest(BaseModel):
    text: str
    length: int
    options: dict[str, Any] = Field(default_factory=dict)

class TruncateOut(BaseModel):
    html: str
    truncated: bool

class TextTruncateOut(BaseModel):
    text: str
    truncated: bool
