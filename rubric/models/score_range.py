"""Inclusive score range owned by a questionnaire."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ScoreRange:
    min_score: int
    max_score: int

    @property
    def is_empty(self) -> bool:
        return self.min_score > self.max_score

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.min_score, self.max_score + 1))


__all__ = ["ScoreRange"]
