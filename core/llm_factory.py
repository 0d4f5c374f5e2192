from __future__ import annotations

from langchain_openai import ChatOpenAI
from openai import AsyncOpenAI

from core.config import AppConfig


def create_llm(
    cfg: AppConfig,
    *,
    model: str,
    temperature: float | None = None,
) -> ChatOpenAI:
    """
    Create the chat model used for every generation call.

    Points at `cfg.base_url` when set, so any OpenAI-compatible server works.
    """
    return ChatOpenAI(
        api_key=cfg.openai_api_key,
        base_url=cfg.base_url,
        model=model,
        temperature=cfg.temperature if temperature is None else temperature,
        max_retries=0,
    )


def create_client(cfg: AppConfig) -> AsyncOpenAI:
    """Raw client, used for the models endpoint which LangChain does not wrap."""
    return AsyncOpenAI(api_key=cfg.openai_api_key, base_url=cfg.base_url, max_retries=0)
