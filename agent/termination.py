from __future__ import annotations

from enum import Enum
from typing import Optional

# Lines the poem must have before the model is asked whether it is done.
MIN_LINES_BEFORE_JUDGMENT = 3
AFFIRMATIVE_TOKEN = "yes"


class PoemStatus(str, Enum):
    GROWING = "growing"
    COMPLETE = "complete"


class Decision(str, Enum):
    CONTINUE = "continue"
    COMPLETE = "complete"
    JUDGE = "judge"


def is_affirmative(answer: Optional[str]) -> bool:
    return AFFIRMATIVE_TOKEN in (answer or "").strip().lower()


class TerminationPolicy:
    """
    Decides, after each appended line, whether the poem is finished.

    A guidance-derived target takes over completely: nothing is asked of the
    model until the target is reached. Otherwise a form with a fixed length
    ends the poem on its own, and everything else is left to a yes/no
    judgment once the poem has a few lines.
    """

    def __init__(
        self,
        ceiling: int,
        *,
        guidance_target: Optional[int] = None,
        style_target: Optional[int] = None,
    ) -> None:
        self.ceiling = ceiling
        self.guidance_target = guidance_target
        self.style_target = style_target
        self.status = PoemStatus.GROWING

    def decide(self, line_count: int) -> Decision:
        if self.status is PoemStatus.COMPLETE:
            return Decision.COMPLETE

        if self.guidance_target is not None:
            if line_count < self.guidance_target:
                return Decision.CONTINUE
            return Decision.JUDGE

        if self.style_target is not None and line_count >= self.style_target:
            self.status = PoemStatus.COMPLETE
            return Decision.COMPLETE

        if line_count >= MIN_LINES_BEFORE_JUDGMENT or line_count == self.ceiling:
            return Decision.JUDGE
        return Decision.CONTINUE

    def record_judgment(self, answer: str) -> PoemStatus:
        if is_affirmative(answer):
            self.status = PoemStatus.COMPLETE
        return self.status

    @property
    def is_complete(self) -> bool:
        return self.status is PoemStatus.COMPLETE
