"""Shared pytest configuration for the poet tests."""

from __future__ import annotations

from typing import List, Optional

import pytest

from core.logging_setup import setup_logger

# Bind the handler before any test swaps sys.stderr.
setup_logger()

# Output-format sentences from agent/prompts.yaml, one per request kind.
KIND_MARKERS = {
    "title": "Respond with only the title itself",
    "seed_line": "Respond with only the quote itself",
    "next_line": "Respond with only the single new line",
    "judgment": 'Answer with only the word "yes" or "no"',
}


def kind_of(prompt: str) -> str:
    for kind, marker in KIND_MARKERS.items():
        if marker in prompt:
            return kind
    raise AssertionError(f"Unrecognized prompt: {prompt[:80]}")


class ScriptedLlm:
    """Deterministic stand-in for the generation capability."""

    def __init__(
        self,
        *,
        title: str = "Stub Title",
        seed_line: str = "Stub seed line",
        judgment: str = "no",
        models: Optional[List[str]] = None,
    ) -> None:
        self.answers = {"title": title, "seed_line": seed_line, "judgment": judgment}
        self.models = models or ["stub-model"]
        self.prompts: List[str] = []
        self.kinds: List[str] = []

    async def generate(self, prompt: str) -> str:
        kind = kind_of(prompt)
        self.prompts.append(prompt)
        self.kinds.append(kind)
        if kind == "next_line":
            return f"  stub line {self.kinds.count('next_line')}  "
        return self.answers[kind]

    async def list_models(self) -> List[str]:
        return list(self.models)

    def count(self, kind: str) -> int:
        return self.kinds.count(kind)

    @property
    def calls(self) -> int:
        return len(self.kinds)


class FailingLlm:
    def __init__(self, fail_on: str = "next_line") -> None:
        self.fail_on = fail_on

    async def generate(self, prompt: str) -> str:
        if kind_of(prompt) == self.fail_on:
            raise ConnectionError("provider unreachable")
        return "fine"

    async def list_models(self) -> List[str]:
        return []


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def scripted() -> ScriptedLlm:
    return ScriptedLlm()


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "POET_MODEL", "POET_TEMPERATURE", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


