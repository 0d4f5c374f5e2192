from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional

from agent.graph import compose_poem
from agent.schemas import Poem, PoemRequest
from core.config import AppConfig
from core.llm_service import ChatModelService, LlmService, find_best_model
from core.logging_setup import setup_logger


@dataclass
class RunOutput:
    ok: bool
    error_user: Optional[str] = None
    poem: Optional[Poem] = None


async def resolve_model(cfg: AppConfig, requested: Optional[str] = None) -> str:
    """Requested model (flag or saved), then POET_MODEL, then best available."""
    if requested:
        return requested
    if cfg.model:
        return cfg.model
    models = await ChatModelService.from_config(cfg).list_models()
    return find_best_model(models)


async def list_models(cfg: AppConfig) -> List[str]:
    return await ChatModelService.from_config(cfg).list_models()


def run_poem(
    llm: LlmService,
    req: PoemRequest,
    transcript: Optional[Callable[[str], None]] = None,
) -> RunOutput:
    """Blocking entry point for front ends that want an error value, not an exception."""
    logger = setup_logger()
    try:
        poem = asyncio.run(compose_poem(llm, req, transcript=transcript))
        return RunOutput(ok=True, poem=poem)
    except Exception as e:
        logger.error(f"compose_failed err={type(e).__name__}:{e}")
        return RunOutput(
            ok=False, error_user="Could not compose the poem. Please try again."
        )
