"""
Interpreting analyzer: exhaustive morphological analysis of one word.

For every stem the lexicon proposes, the analyzer walks the morphotactic
graph depth-first.  At each state it renders every applicable transition's
suffix against the current phonetic attributes and follows it if the
letters are a prefix of the remaining input.  A path is accepted when the
input is consumed, the state is terminal and nothing forbids ending there.

Usage:
    from trmorph.analyzer import InterpretingAnalyzer
    from trmorph.dictionary import load_lines

    analyzer = InterpretingAnalyzer(load_lines(["kitap", "elma"]))
    for result in analyzer.analyze("kitabım"):
        print(result)          # [kitap:Noun] kitab:Noun+A3sg+P1sg:ım+Nom

Search state lives in immutable SearchPath values created per call, so one
analyzer can serve many threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from trmorph.alphabet import PhoneticAttribute, calculate_phonetic_attributes, is_vowel, normalize
from trmorph.lexicon import DictionaryItem, RootLexicon, StemTransition
from trmorph.morphemes import Morpheme, PrimaryPos
from trmorph.morphotactics import (
    MorphemeState,
    Morphotactics,
    SuffixTransition,
    TurkishMorphotactics,
)
from trmorph.surface import surface_forms
from trmorph.trace import AnalysisDebugData, RejectReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MorphemeSurfaceForm:
    """One step of an analysis: the transition taken and the letters it
    consumed (empty for zero morphemes)."""

    transition: SuffixTransition
    surface: str

    @property
    def morpheme(self) -> Morpheme:
        return self.transition.morpheme

    @property
    def id(self) -> str:
        return self.transition.morpheme.id

    def format(self) -> str:
        return f"{self.id}:{self.surface}" if self.surface else self.id

    def __str__(self) -> str:
        return self.format()


def _format_morphemes(root: str, root_morpheme: Morpheme, forms: tuple[MorphemeSurfaceForm, ...]) -> str:
    parts = [f"{root}:{root_morpheme.id}"]
    for form in forms:
        sep = "|" if form.transition.target.derivative else "+"
        parts.append(sep + form.format())
    return "".join(parts)


@dataclass(frozen=True, slots=True)
class SearchPath:
    """A partial analysis.  extend() returns a new path; nothing is shared
    mutably between branches."""

    word: str
    tail: str
    stem: StemTransition
    root_state: MorphemeState
    state: MorphemeState
    suffixes: tuple[MorphemeSurfaceForm, ...]
    attributes: frozenset[PhoneticAttribute]
    has_surface_since_derivation: bool = False
    contains_derivation: bool = False

    @classmethod
    def initial(cls, word: str, stem: StemTransition, tail: str, state: MorphemeState) -> SearchPath:
        return cls(
            word=word,
            tail=tail,
            stem=stem,
            root_state=state,
            state=state,
            suffixes=(),
            attributes=stem.attributes,
        )

    @property
    def item(self) -> DictionaryItem:
        return self.stem.item

    def contains_morpheme(self, morpheme_id: str) -> bool:
        if self.root_state.morpheme.id == morpheme_id:
            return True
        return any(s.transition.morpheme.id == morpheme_id for s in self.suffixes)

    def extend(
        self,
        transition: SuffixTransition,
        surface: str,
        extra: frozenset[PhoneticAttribute] = frozenset(),
    ) -> SearchPath:
        attributes = calculate_phonetic_attributes(surface, self.attributes)
        if extra:
            attributes = attributes | extra
        derivative = transition.target.derivative
        return SearchPath(
            word=self.word,
            tail=self.tail[len(surface):],
            stem=self.stem,
            root_state=self.root_state,
            state=transition.target,
            suffixes=self.suffixes + (MorphemeSurfaceForm(transition, surface),),
            attributes=attributes,
            has_surface_since_derivation=(
                False if derivative else self.has_surface_since_derivation or bool(surface)
            ),
            contains_derivation=self.contains_derivation or derivative,
        )

    def format(self) -> str:
        text = _format_morphemes(self.stem.surface, self.root_state.morpheme, self.suffixes)
        return f"{text} [{self.tail!r}]" if self.tail else text


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """A complete analysis of a word.

    ``root`` is the stem spelling actually consumed ("kitab"), ``item`` the
    dictionary entry it belongs to, ``morphemes`` the ordered suffix steps
    after the root and ``state`` the terminal state reached.
    """

    root: str
    item: DictionaryItem
    morphemes: tuple[MorphemeSurfaceForm, ...]
    state: MorphemeState
    root_morpheme: Morpheme

    @classmethod
    def from_path(cls, path: SearchPath) -> AnalysisResult:
        return cls(
            root=path.stem.surface,
            item=path.item,
            morphemes=path.suffixes,
            state=path.state,
            root_morpheme=path.root_state.morpheme,
        )

    # ── Convenience accessors ────────────────────────────────────────────

    @property
    def lemma(self) -> str:
        return self.item.lemma

    @property
    def pos(self) -> PrimaryPos:
        return self.item.pos

    @property
    def surface(self) -> str:
        """Root plus every suffix; equals the analysed (normalized) word."""
        return self.root + "".join(m.surface for m in self.morphemes)

    @property
    def suffixes(self) -> list[str]:
        """Non-empty suffix spellings in order."""
        return [m.surface for m in self.morphemes if m.surface]

    def morpheme_ids(self) -> list[str]:
        return [self.root_morpheme.id] + [m.id for m in self.morphemes]

    def contains_morpheme(self, morpheme_id: str) -> bool:
        target = morpheme_id.lower()
        return any(m.lower() == target for m in self.morpheme_ids())

    def key(self) -> tuple:
        return (self.root, self.item.id, tuple((m.id, m.surface) for m in self.morphemes))

    def format(self) -> str:
        return _format_morphemes(self.root, self.root_morpheme, self.morphemes)

    def __str__(self) -> str:
        return f"[{self.item.lemma}:{self.item.pos.value}] {self.format()}"


class InterpretingAnalyzer:
    """Finds every analysis of a word against a root lexicon."""

    def __init__(self, lexicon: RootLexicon, morphotactics: Morphotactics | None = None):
        self.lexicon = lexicon
        self.morphotactics = morphotactics if morphotactics is not None else TurkishMorphotactics()

    def analyze(self, word: str, debug: AnalysisDebugData | None = None) -> list[AnalysisResult]:
        """All analyses of word, in a stable order.  No analysis is a
        normal empty list, never an error."""
        normalized = normalize(word)
        candidates = self.lexicon.candidates_for_prefix(normalized)
        if debug is not None:
            debug.record_candidates(normalized, candidates)

        results: list[AnalysisResult] = []
        for stem, tail in candidates:
            state = self.morphotactics.stem_state(stem)
            path = SearchPath.initial(normalized, stem, tail, state)
            self._search(path, results, debug)

        logger.debug(
            "%s: %d candidate stem(s), %d analysis(es)",
            normalized, len(candidates), len(results),
        )
        return results

    def analyze_all(self, words: list[str]) -> dict[str, list[AnalysisResult]]:
        return {w: self.analyze(w) for w in words}

    # ── Search ───────────────────────────────────────────────────────────

    def _search(
        self,
        path: SearchPath,
        results: list[AnalysisResult],
        debug: AnalysisDebugData | None,
    ) -> None:
        accepted = False
        if not path.tail and self.morphotactics.is_terminal(path.state):
            if PhoneticAttribute.CannotTerminate not in path.attributes:
                result = AnalysisResult.from_path(path)
                results.append(result)
                accepted = True
                if debug is not None:
                    debug.record_result(path.word, result)

        transitions = self.morphotactics.outgoing_transitions(path.state, path)
        if debug is not None:
            passed = {id(t) for t in transitions}
            for transition in path.state.outgoing:
                if id(transition) not in passed:
                    debug.record_rejection(
                        path, RejectReason.CONDITION_FAILED, transition, str(transition.condition),
                    )

        extended = False
        for transition in transitions:
            for surface, extra in surface_forms(transition.template, path.attributes):
                reason = self._reject_reason(path, surface)
                if reason is not None:
                    if debug is not None:
                        debug.record_rejection(path, reason, transition, surface)
                    continue
                extended = True
                self._search(path.extend(transition, surface, extra), results, debug)

        if debug is not None and not accepted and not extended:
            if path.tail:
                debug.record_rejection(path, RejectReason.NO_TRANSITION)
            elif not self.morphotactics.is_terminal(path.state):
                debug.record_rejection(path, RejectReason.NOT_TERMINAL)
            else:
                debug.record_rejection(path, RejectReason.CANNOT_TERMINATE)

    @staticmethod
    def _reject_reason(path: SearchPath, surface: str) -> RejectReason | None:
        """Why surface cannot follow path, or None if it can."""
        if not path.tail.startswith(surface):
            return RejectReason.SURFACE_MISMATCH
        if surface:
            if PhoneticAttribute.ExpectsVowel in path.attributes and not is_vowel(surface[0]):
                return RejectReason.EXPECTS_VOWEL
            if PhoneticAttribute.ExpectsConsonant in path.attributes and is_vowel(surface[0]):
                return RejectReason.EXPECTS_CONSONANT
        return None
