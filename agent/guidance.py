from __future__ import annotations

import re
from typing import Optional

from agent.styles import StyleRule

DEFAULT_MAX_LINES = 12

# "24 lines long", "6 lines in length", "10 lines total"
_LINE_COUNT_RE = re.compile(r"(\d+)\s+lines?\s+(?:long|in length|total)", re.IGNORECASE)


def extract_line_count(guidance: Optional[str]) -> Optional[int]:
    """First explicit line count found in guidance text, if positive."""
    if not guidance:
        return None
    m = _LINE_COUNT_RE.search(guidance)
    if not m:
        return None
    count = int(m.group(1))
    return count if count > 0 else None


def resolve_target_length(guidance: Optional[str], rule: StyleRule) -> int:
    """guidance > style > default."""
    from_guidance = extract_line_count(guidance)
    if from_guidance is not None:
        return from_guidance
    if rule.is_structured:
        return rule.target_lines
    return DEFAULT_MAX_LINES
