"""
The generation capability the poet talks to.

Anything with `generate` and `list_models` coroutines will do; nothing has
to inherit from a base class.
"""
from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from langchain_core.language_models import BaseChatModel
from openai import AsyncOpenAI

from core.config import AppConfig
from core.llm_factory import create_client, create_llm
from core.logging_setup import setup_logger
from core.safe_call import timed_generate


class NoModelsAvailableError(RuntimeError):
    """The backend reported no models at all."""


@runtime_checkable
class LlmService(Protocol):
    async def generate(self, prompt: str) -> str: ...

    async def list_models(self) -> List[str]: ...


class ChatModelService:
    """LangChain chat model for generation, OpenAI models endpoint for listing."""

    def __init__(self, llm: BaseChatModel | None, client: AsyncOpenAI, model: str = "") -> None:
        self.llm = llm
        self.client = client
        self.model = model
        self.logger = setup_logger()

    @classmethod
    def from_config(cls, cfg: AppConfig, model: str = "") -> "ChatModelService":
        # Listing works without a model; generation needs one.
        llm = create_llm(cfg, model=model) if model else None
        return cls(llm, create_client(cfg), model)

    async def generate(self, prompt: str) -> str:
        if self.llm is None:
            raise RuntimeError("No model selected for generation")
        llm = self.llm
        return await timed_generate(
            self.logger,
            label=f"generate model={self.model}",
            fn=lambda: llm.ainvoke(prompt),
        )

    async def list_models(self) -> List[str]:
        page = await self.client.models.list()
        return [m.id for m in page.data]


def find_best_model(models: Sequence[str]) -> str:
    """Prefer instruction-tuned models, then small (8b) ones, then the first listed."""
    if not models:
        raise NoModelsAvailableError(
            "No models available. Pull or deploy a model first (e.g. `ollama pull <model_name>`)."
        )
    for marker in ("instruct", "8b"):
        for name in models:
            if marker in name:
                return name
    return models[0]
