from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Any

import yaml

from core.logging_setup import setup_logger

DEFAULT_PROMPTS_PATH = Path(__file__).resolve().parent.parent / "agent" / "prompts.yaml"

REQUIRED_KINDS = ["title", "seed_line", "next_line", "judgment"]
REQUIRED_BLOCKS = ["persona", "theme", "guidance", "style", "scheme", "position"]

# Cache keyed by path; templates never change while the process runs.
_PROMPT_CACHE: Dict[str, Dict[str, Dict[str, str]]] = {}


def _validate_section(
    section: str, block: Any, required: list[str]
) -> Dict[str, str]:
    """
    Validate a section shaped like:
      section:
        name: "..."
    """
    if not isinstance(block, dict):
        raise ValueError(
            f"Prompt section '{section}' must be a mapping with keys: {', '.join(required)}"
        )

    normalized: Dict[str, str] = {}
    for name in required:
        text = block.get(name)
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Missing or empty prompt: {section}.{name}")
        normalized[name] = text.strip()
    return normalized


def load_prompts(path: Optional[str | Path] = None) -> Dict[str, Dict[str, str]]:
    """
    Load directive templates from YAML and validate required keys.

    Expected structure:
      roles:  {title, seed_line, next_line, judgment}
      blocks: {persona, theme, guidance, style, scheme, position}
      output: {title, seed_line, next_line, judgment}
    """
    p = Path(path) if path is not None else DEFAULT_PROMPTS_PATH
    key = str(p)
    if key in _PROMPT_CACHE:
        return _PROMPT_CACHE[key]

    logger = setup_logger()

    if not p.exists():
        raise FileNotFoundError(f"Prompt file not found: {p}")

    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("prompts.yaml must contain the sections: roles, blocks, output")

    normalized = {
        "roles": _validate_section("roles", data.get("roles"), REQUIRED_KINDS),
        "blocks": _validate_section("blocks", data.get("blocks"), REQUIRED_BLOCKS),
        "output": _validate_section("output", data.get("output"), REQUIRED_KINDS),
    }

    logger.info(f"Loaded prompts from {p}")
    _PROMPT_CACHE[key] = normalized
    return normalized
