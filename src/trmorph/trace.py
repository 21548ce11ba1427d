"""
Debug trace for the analyzer.

An AnalysisDebugData object is passed to ``InterpretingAnalyzer.analyze``
to record which stems were tried and why each abandoned hypothesis failed.
The analyzer only writes to it; the caller owns it and decides how to
print it.  Recording never changes the returned results.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from trmorph.analyzer import AnalysisResult, SearchPath
    from trmorph.lexicon import StemTransition
    from trmorph.morphotactics import SuffixTransition


class RejectReason(Enum):
    SURFACE_MISMATCH = "surface mismatch"
    EXPECTS_VOWEL = "expects vowel"
    EXPECTS_CONSONANT = "expects consonant"
    CONDITION_FAILED = "morphotactic violation"
    NO_TRANSITION = "no applicable transition"
    NOT_TERMINAL = "non-terminal end"
    CANNOT_TERMINATE = "cannot terminate"


@dataclass(slots=True)
class RejectedPath:
    word: str
    path: str
    state: str
    reason: RejectReason
    transition: str | None = None
    detail: str = ""

    def __str__(self) -> str:
        via = f" via {self.transition}" if self.transition else ""
        detail = f" ({self.detail})" if self.detail else ""
        return f"{self.path}{via}: {self.reason.value}{detail}"


@dataclass(slots=True)
class AnalysisDebugData:
    """Collects candidates, rejections and results across analyze() calls."""

    words: list[str] = field(default_factory=list)
    candidates: dict[str, list[str]] = field(default_factory=dict)
    rejections: list[RejectedPath] = field(default_factory=list)
    results: dict[str, list[str]] = field(default_factory=dict)

    def record_candidates(
        self, word: str, candidates: Iterable[tuple[StemTransition, str]],
    ) -> None:
        self.words.append(word)
        self.candidates[word] = [f"{stem}+{remainder!r}" for stem, remainder in candidates]
        self.results.setdefault(word, [])

    def record_rejection(
        self,
        path: SearchPath,
        reason: RejectReason,
        transition: SuffixTransition | None = None,
        detail: str = "",
    ) -> None:
        self.rejections.append(RejectedPath(
            word=path.word,
            path=path.format(),
            state=path.state.id,
            reason=reason,
            transition=str(transition) if transition is not None else None,
            detail=detail,
        ))

    def record_result(self, word: str, result: AnalysisResult) -> None:
        self.results.setdefault(word, []).append(result.format())

    # ── Inspection ───────────────────────────────────────────────────────

    def by_path(self) -> dict[str, list[RejectReason]]:
        """Rejected path -> reasons it was abandoned for."""
        grouped: dict[str, list[RejectReason]] = {}
        for r in self.rejections:
            grouped.setdefault(r.path, []).append(r.reason)
        return grouped

    def reasons(self) -> Counter:
        return Counter(r.reason for r in self.rejections)

    def rejections_for(self, word: str) -> list[RejectedPath]:
        return [r for r in self.rejections if r.word == word]

    def dump(self) -> list[str]:
        """Human-readable lines, one section per analysed word."""
        lines: list[str] = []
        for word in self.words:
            lines.append(f"═══ {word} ═══")
            lines.append("Stem candidates:")
            for c in self.candidates.get(word, []):
                lines.append(f"  {c}")
            lines.append("Rejected:")
            for r in self.rejections_for(word):
                lines.append(f"  {r}")
            lines.append("Accepted:")
            for a in self.results.get(word, []):
                lines.append(f"  {a}")
        return lines

    def to_json(self, indent: int = 2) -> str:
        data = {
            "words": self.words,
            "candidates": self.candidates,
            "rejections": [
                {**asdict(r), "reason": r.reason.value} for r in self.rejections
            ],
            "results": self.results,
        }
        return json.dumps(data, indent=indent, ensure_ascii=False)
