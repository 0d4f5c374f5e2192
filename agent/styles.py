"""
Structural rules for named poetic forms.

Each form knows how long it is and what the line at a given 1-based index
has to do (rhyme partner, syllable count, rhythm).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

Directive = Callable[[int], Optional[str]]


def _no_directive(index: int) -> Optional[str]:
    return None


@dataclass(frozen=True)
class StyleRule:
    name: str
    target_lines: Optional[int] = None
    scheme: Optional[str] = None
    directive_fn: Directive = field(default=_no_directive, repr=False, compare=False)

    def directive(self, index: int) -> Optional[str]:
        return self.directive_fn(index)

    @property
    def is_structured(self) -> bool:
        return self.target_lines is not None


def _haiku(index: int) -> Optional[str]:
    if index == 2:
        return "7 syllables"
    if index == 3:
        return "5 syllables, concludes the haiku."
    return None


def _limerick(index: int) -> Optional[str]:
    if index in (1, 2, 5):
        return "rhymes with line 1, anapestic rhythm (da-da-DUM)"
    if index in (3, 4):
        return "rhymes with line 3, anapestic rhythm (da-da-DUM)"
    return None


# Quatrain line -> line it rhymes with (ABAB CDCD EFEF).
_SONNET_PARTNERS = {3: 1, 4: 2, 7: 5, 8: 6, 11: 9, 12: 10}
_SONNET_OPENERS = {1: "A", 2: "B", 5: "C", 6: "D", 9: "E", 10: "F"}


def _sonnet(index: int) -> Optional[str]:
    if index in _SONNET_OPENERS:
        return f"introduces the {_SONNET_OPENERS[index]} rhyme of its quatrain, iambic pentameter"
    if index in _SONNET_PARTNERS:
        return f"rhymes with line {_SONNET_PARTNERS[index]}, iambic pentameter"
    if index == 13:
        return "opens the closing couplet (G rhyme), iambic pentameter"
    if index == 14:
        return "rhymes with line 13 to close the couplet, iambic pentameter"
    return None


FREE_VERSE = StyleRule(name="Free Verse")
HAIKU = StyleRule(name="Haiku", target_lines=3, scheme="5-7-5 syllables", directive_fn=_haiku)
LIMERICK = StyleRule(name="Limerick", target_lines=5, scheme="AABBA", directive_fn=_limerick)
SONNET = StyleRule(
    name="Sonnet", target_lines=14, scheme="ABAB CDCD EFEF GG", directive_fn=_sonnet
)

STYLE_TABLE: Dict[str, StyleRule] = {
    "haiku": HAIKU,
    "limerick": LIMERICK,
    "sonnet": SONNET,
    "free verse": FREE_VERSE,
    "free_verse": FREE_VERSE,
    "freeverse": FREE_VERSE,
    "random": FREE_VERSE,
}


def resolve_style(style: Optional[str]) -> StyleRule:
    """
    Look up the rule for a style name (case-insensitive).

    Unknown names become a Custom rule: the name is kept for the prompt,
    but there is no fixed length and no positional directive.
    """
    if not style or not style.strip():
        return FREE_VERSE
    key = style.strip().lower()
    if key in STYLE_TABLE:
        return STYLE_TABLE[key]
    return StyleRule(name=style.strip())
