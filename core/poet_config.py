from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agent.schemas import PoemRequest
from core.logging_setup import setup_logger

CONFIG_FILE_NAME = ".poet"
BIO_FILE_NAME = ".me.toon"

# Fields a saved config can prefill on a request.
REQUEST_FIELDS = ("title", "seed_line", "theme", "style")


class PoetConfig(BaseModel):
    """Settings remembered between runs in a `.poet` JSON file."""

    # seedLine on disk, seed_line in code
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model: Optional[str] = None
    title: Optional[str] = None
    seed_line: Optional[str] = Field(None, alias="seedLine")
    theme: Optional[str] = None
    style: Optional[str] = None


def config_path(working_dir: Optional[Path] = None) -> Path:
    return Path(working_dir or Path.cwd()) / CONFIG_FILE_NAME


def load_poet_config(working_dir: Optional[Path] = None) -> Optional[PoetConfig]:
    """Saved settings, or None when there are none (or they can't be read)."""
    logger = setup_logger()
    p = config_path(working_dir)

    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"config_unreadable path={p} err={type(e).__name__}:{e}")
        return None

    try:
        return PoetConfig.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"config_invalid path={p} errors={e.error_count()}")
        return None


def save_poet_config(cfg: PoetConfig, working_dir: Optional[Path] = None) -> Path:
    p = config_path(working_dir)
    data = cfg.model_dump(by_alias=True, exclude_none=True)
    p.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    setup_logger().info(f"Settings saved to {p}")
    return p


def load_bio(home: Optional[Path] = None) -> Optional[str]:
    """Persona text from ~/.me.toon, trimmed. None when missing or empty."""
    p = Path(home or Path.home()) / BIO_FILE_NAME
    try:
        text = p.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        setup_logger().warning(f"bio_unreadable path={p} err={type(e).__name__}:{e}")
        return None
    return text or None


def merge_request(
    overrides: Mapping[str, Any],
    saved: Optional[PoetConfig] = None,
    *,
    user_bio: Optional[str] = None,
    guidance: Optional[str] = None,
) -> PoemRequest:
    """Explicit values beat saved ones; anything still missing stays absent."""
    fields: Dict[str, Any] = {}
    for name in REQUEST_FIELDS:
        value = overrides.get(name)
        if not value and saved is not None:
            value = getattr(saved, name)
        fields[name] = value
    return PoemRequest(**fields, user_bio=user_bio, guidance=guidance)
