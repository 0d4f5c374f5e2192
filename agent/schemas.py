from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal

RequestKind = Literal["title", "seed_line", "next_line", "judgment"]

# Values meaning "let the model choose" for theme and style.
RANDOM_SENTINEL = "random"


class PoemRequest(BaseModel):
    """Everything one run is steered by. Never mutated once built."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    seed_line: Optional[str] = None
    theme: Optional[str] = None
    style: Optional[str] = None
    user_bio: Optional[str] = None
    guidance: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("theme", "style")
    @classmethod
    def _random_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v.lower() == RANDOM_SENTINEL:
            return None
        return v


class Poem(BaseModel):
    title: str
    lines: List[str] = Field(default_factory=list)

    def add_line(self, line: str) -> None:
        self.lines.append(line)

    def __str__(self) -> str:
        return f"{self.title}\n\n" + "\n".join(self.lines)
