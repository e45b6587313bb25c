"""Match-key strategies: question text -> grouping key."""

from __future__ import annotations

import re
from typing import Protocol

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class QuestionKeyStrategy(Protocol):
    """Anything that maps question text to a key; equal keys mean 'same question'."""

    def __call__(self, question: str) -> str: ...


class AlnumPrefixKey:
    """Lower-case, drop everything outside [a-z0-9], keep the first `length` chars.

    Heuristic: only case/punctuation/spacing differences merge. Paraphrases
    and reordered wording stay separate.
    """

    def __init__(self, length: int = 50) -> None:
        self.length = length

    def __call__(self, question: str) -> str:
        return _NON_ALNUM.sub("", question.lower())[: self.length]


question_key = AlnumPrefixKey()
