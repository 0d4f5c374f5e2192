import os
from dataclasses import dataclass
from typing import Optional

# Any OpenAI-compatible server that ignores keys (e.g. a local Ollama).
PLACEHOLDER_API_KEY = "not-needed"
DEFAULT_TEMPERATURE = 0.9


@dataclass(frozen=True)
class AppConfig:
    openai_api_key: str
    base_url: Optional[str] = None  # optional: OpenAI-compatible endpoint
    model: Optional[str] = None  # optional: otherwise saved config or auto-selection
    temperature: float = DEFAULT_TEMPERATURE
    log_level: str = "INFO"


def load_config() -> AppConfig:
    base_url = os.getenv("OPENAI_BASE_URL", "").strip() or None

    key = os.getenv("OPENAI_API_KEY", "").strip()
    if not key:
        if base_url is None:
            raise ValueError(
                "Missing OPENAI_API_KEY. Create a .env file and set OPENAI_API_KEY, "
                "or set OPENAI_BASE_URL to a local OpenAI-compatible server."
            )
        key = PLACEHOLDER_API_KEY

    raw_temp = os.getenv("POET_TEMPERATURE", "").strip()
    try:
        temperature = float(raw_temp) if raw_temp else DEFAULT_TEMPERATURE
    except ValueError:
        raise ValueError(f"POET_TEMPERATURE must be a number, got {raw_temp!r}") from None
    if not 0.0 <= temperature <= 2.0:
        raise ValueError(f"POET_TEMPERATURE must be between 0 and 2, got {temperature}")

    return AppConfig(
        openai_api_key=key,
        base_url=base_url,
        model=os.getenv("POET_MODEL", "").strip() or None,
        temperature=temperature,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
