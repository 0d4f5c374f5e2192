"""
Prompt text for each request made while composing a poem.

Blocks are concatenated in a fixed order so the strongest constraints
(guidance, then the form and its positional directive) sit closest to the
end, where the model reads last. Everything a prompt depends on is passed
in; nothing is kept between calls.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from agent.schemas import Poem, PoemRequest, RequestKind
from agent.styles import resolve_style
from core.prompt_loader import load_prompts

# Optional blocks each request kind may carry, in emission order.
KIND_BLOCKS: Dict[str, Tuple[str, ...]] = {
    "title": ("persona", "theme", "guidance"),
    "seed_line": ("persona", "theme"),
    "next_line": ("persona", "theme", "guidance", "style"),
    "judgment": ("guidance", "style"),
}


def _style_block(
    templates: Dict[str, str], req: PoemRequest, kind: RequestKind, line_index: Optional[int]
) -> str:
    rule = resolve_style(req.style)
    parts = [templates["style"].format(style=req.style)]
    if rule.scheme:
        parts.append(templates["scheme"].format(style=rule.name, scheme=rule.scheme))
    if kind == "next_line" and line_index is not None:
        directive = rule.directive(line_index)
        if directive:
            parts.append(
                templates["position"].format(line_index=line_index, directive=directive)
            )
    return "\n".join(parts)


def _optional_block(
    name: str,
    templates: Dict[str, str],
    req: PoemRequest,
    kind: RequestKind,
    line_index: Optional[int],
) -> Optional[str]:
    if name == "persona" and req.user_bio:
        return templates["persona"].format(user_bio=req.user_bio)
    if name == "theme" and req.theme:
        return templates["theme"].format(theme=req.theme)
    if name == "guidance" and req.guidance:
        return templates["guidance"].format(guidance=req.guidance)
    if name == "style" and req.style:
        return _style_block(templates, req, kind, line_index)
    return None


def compose_prompt(
    kind: RequestKind,
    req: PoemRequest,
    poem: Optional[Poem] = None,
    line_index: Optional[int] = None,
    prompts: Optional[Dict[str, Dict[str, str]]] = None,
) -> str:
    """
    Build the text for one generation call.

    `poem` is required for next_line and judgment requests. `line_index` is
    the 1-based index of the line about to be written and defaults to the
    line after the last one in `poem`.
    """
    if kind not in KIND_BLOCKS:
        raise ValueError(f"Unknown request kind: {kind}")

    prompts = prompts or load_prompts()

    if kind in ("next_line", "judgment"):
        if poem is None:
            raise ValueError(f"A poem is required for a {kind} request")
        if line_index is None and kind == "next_line":
            line_index = len(poem.lines) + 1
        role = prompts["roles"][kind].format(
            title=poem.title,
            lines="\n".join(poem.lines),
            line_index=line_index,
        )
    else:
        role = prompts["roles"][kind]

    sections: List[str] = [role]
    for name in KIND_BLOCKS[kind]:
        block = _optional_block(name, prompts["blocks"], req, kind, line_index)
        if block:
            sections.append(block)
    sections.append(prompts["output"][kind])

    return "\n\n".join(sections)
