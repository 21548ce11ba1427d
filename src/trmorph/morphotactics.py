"""
The morphotactic graph: which morphemes may follow which.

States are morphological positions (a morpheme plus terminal/derivation
flags); transitions carry a suffix template and an applicability condition.
The graph is built and validated once, then treated as read-only and shared
by every analysis.

Usage:
    from trmorph.morphotactics import TurkishMorphotactics

    graph = TurkishMorphotactics()
    print(graph.summary())
    state = graph.root_state(PrimaryPos.Noun)
    [str(t) for t in state.outgoing]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from trmorph.alphabet import PhoneticAttribute
from trmorph.conditions import (
    Condition,
    ContainsDerivation,
    ContainsMorpheme,
    HasNoSurface,
    HasPhoneticAttribute,
    HasRootAttribute,
)
from trmorph.lexicon import StemTransition, StemVariant
from trmorph.morphemes import Morpheme, PrimaryPos, RootAttribute, get_morpheme
from trmorph.surface import EMPTY_TEMPLATE, SuffixTemplate, TemplateError

if TYPE_CHECKING:
    from trmorph.analyzer import SearchPath

logger = logging.getLogger(__name__)


class MorphotacticsError(ValueError):
    """The transition table is malformed or self-contradictory."""


@dataclass(eq=False, slots=True)
class MorphemeState:
    """A node of the graph.  Compared by identity."""

    id: str
    morpheme: Morpheme
    terminal: bool = False
    derivative: bool = False
    pos_root: bool = False
    outgoing: tuple[SuffixTransition, ...] = ()

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        flags = "".join(f for f, on in (("T", self.terminal), ("D", self.derivative)) if on)
        return f"MorphemeState({self.id}:{self.morpheme.id}{'/' + flags if flags else ''})"


@dataclass(frozen=True, eq=False, slots=True)
class SuffixTransition:
    """An edge: taking it appends target.morpheme realized from template."""

    source: MorphemeState
    target: MorphemeState
    template: SuffixTemplate = EMPTY_TEMPLATE
    condition: Condition | None = None

    @property
    def morpheme(self) -> Morpheme:
        return self.target.morpheme

    def can_pass(self, path: SearchPath) -> bool:
        return self.condition is None or self.condition.accept(path)

    def __str__(self) -> str:
        return f"[{self.source.id}→{self.target.id}:{self.template.text or 'ε'}]"


class Morphotactics:
    """Graph container with construction-time validation.

    Subclasses implement build() using add_state / add_root_state /
    add_transition.  Any inconsistency raises MorphotacticsError from the
    constructor, never during analysis.
    """

    def __init__(self):
        self.states: dict[str, MorphemeState] = {}
        self.transitions: list[SuffixTransition] = []
        self._root_states: dict[PrimaryPos, MorphemeState] = {}
        self._entry_states: list[MorphemeState] = []
        self._pending: dict[int, list[SuffixTransition]] = {}

        self.build()
        self._validate()
        self._freeze()
        logger.info(
            "Morphotactic graph ready: %d states, %d transitions",
            len(self.states), len(self.transitions),
        )

    def build(self) -> None:
        raise NotImplementedError

    # ── Construction helpers ─────────────────────────────────────────────

    def add_state(
        self,
        state_id: str,
        morpheme_id: str,
        *,
        terminal: bool = False,
        derivative: bool = False,
        entry: bool = False,
    ) -> MorphemeState:
        """Register a state.  entry=True marks a stem entry point."""
        if state_id in self.states:
            raise MorphotacticsError(f"Duplicate state id {state_id!r}")
        try:
            morpheme = get_morpheme(morpheme_id)
        except KeyError:
            raise MorphotacticsError(
                f"State {state_id!r} references undefined morpheme {morpheme_id!r}"
            ) from None
        state = MorphemeState(
            state_id, morpheme, terminal=terminal, derivative=derivative,
            pos_root=morpheme.pos is not None,
        )
        self.states[state_id] = state
        if entry:
            self._entry_states.append(state)
        return state

    def add_root_state(
        self,
        pos: PrimaryPos,
        state_id: str,
        morpheme_id: str,
        *,
        terminal: bool = False,
    ) -> MorphemeState:
        """Register the state a root of the given category starts from."""
        if pos in self._root_states:
            raise MorphotacticsError(f"Root state for {pos.value} already defined")
        state = self.add_state(state_id, morpheme_id, terminal=terminal, entry=True)
        self._root_states[pos] = state
        return state

    def add_transition(
        self,
        source: MorphemeState,
        target: MorphemeState,
        template: str = "",
        condition: Condition | None = None,
    ) -> SuffixTransition:
        try:
            parsed = SuffixTemplate.parse(template) if template else EMPTY_TEMPLATE
        except TemplateError as e:
            raise MorphotacticsError(
                f"Transition {source.id} -> {target.id}: {e}"
            ) from None
        transition = SuffixTransition(source, target, parsed, condition)
        self.transitions.append(transition)
        self._pending.setdefault(id(source), []).append(transition)
        return transition

    def add_empty(
        self,
        source: MorphemeState,
        target: MorphemeState,
        condition: Condition | None = None,
    ) -> SuffixTransition:
        return self.add_transition(source, target, "", condition)

    # ── Validation ───────────────────────────────────────────────────────

    def _validate(self) -> None:
        registered = {id(s) for s in self.states.values()}

        for t in self.transitions:
            if id(t.source) not in registered:
                raise MorphotacticsError(f"Transition {t} starts at unregistered state {t.source.id!r}")
            if id(t.target) not in registered:
                raise MorphotacticsError(f"Transition {t} targets unregistered state {t.target.id!r}")

        if not self._entry_states:
            raise MorphotacticsError("Graph has no root states")

        # Reachability from the stem entry points
        reached = {id(s) for s in self._entry_states}
        frontier = list(self._entry_states)
        while frontier:
            state = frontier.pop()
            for t in self._pending.get(id(state), ()):
                if id(t.target) not in reached:
                    reached.add(id(t.target))
                    frontier.append(t.target)
        for state in self.states.values():
            if id(state) not in reached:
                raise MorphotacticsError(f"State {state.id!r} is unreachable from any root state")
            if not state.terminal and not self._pending.get(id(state)):
                raise MorphotacticsError(
                    f"Non-terminal state {state.id!r} has no outgoing transitions"
                )

        self._check_empty_cycles()

    def _check_empty_cycles(self) -> None:
        """Zero-surface transitions must not form a cycle (the search would
        never consume input)."""
        visiting: set[int] = set()
        done: set[int] = set()

        def visit(state: MorphemeState, trail: list[str]) -> None:
            visiting.add(id(state))
            for t in self._pending.get(id(state), ()):
                if not t.template.is_empty:
                    continue
                if id(t.target) in visiting:
                    cycle = " -> ".join(trail + [state.id, t.target.id])
                    raise MorphotacticsError(f"Cycle of empty transitions: {cycle}")
                if id(t.target) not in done:
                    visit(t.target, trail + [state.id])
            visiting.discard(id(state))
            done.add(id(state))

        for state in self.states.values():
            if id(state) not in done:
                visit(state, [])

    def _freeze(self) -> None:
        for state in self.states.values():
            state.outgoing = tuple(self._pending.get(id(state), ()))
        self._pending = {}

    # ── Queries ──────────────────────────────────────────────────────────

    def root_state(self, pos: PrimaryPos) -> MorphemeState:
        try:
            return self._root_states[pos]
        except KeyError:
            raise KeyError(f"No root state for {pos.value}") from None

    def stem_state(self, stem: StemTransition) -> MorphemeState:
        """State a stem spelling enters the graph at."""
        return self.root_state(stem.item.pos)

    def outgoing_transitions(self, state: MorphemeState, path: SearchPath) -> list[SuffixTransition]:
        """Transitions of state whose condition accepts path, in table order."""
        return [t for t in state.outgoing if t.can_pass(path)]

    def is_terminal(self, state: MorphemeState) -> bool:
        return state.terminal

    def __iter__(self) -> Iterator[MorphemeState]:
        return iter(self.states.values())

    def summary(self) -> str:
        lines = [
            f"States:       {len(self.states)}",
            f"Transitions:  {len(self.transitions)}",
            f"Terminal:     {sum(1 for s in self.states.values() if s.terminal)}",
            "",
            "Root states:",
        ]
        for pos, state in self._root_states.items():
            lines.append(f"  {pos.value:8s} {state.id}")
        return "\n".join(lines)


class TurkishMorphotactics(Morphotactics):
    """Nominal, adjectival, verbal and uninflected sub-graphs for Turkish."""

    def build(self) -> None:
        self._build_nouns()
        self._build_adjectives()
        self._build_uninflected()
        self._build_verbs()

    def stem_state(self, stem: StemTransition) -> MorphemeState:
        if stem.variant is StemVariant.PROGRESSIVE_DROP:
            return self.verb_root_vowel_drop
        return self.root_state(stem.item.pos)

    # ── Nouns ────────────────────────────────────────────────────────────

    def _build_nouns(self) -> None:
        add = self.add_transition
        state = self.add_state

        self.noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")

        a3sg = state("a3sg_S", "A3sg")
        a3pl = state("a3pl_S", "A3pl")

        pnon = state("pnon_S", "Pnon")
        p1sg = state("p1sg_S", "P1sg")
        p2sg = state("p2sg_S", "P2sg")
        p3sg = state("p3sg_S", "P3sg")
        p1pl = state("p1pl_S", "P1pl")
        p2pl = state("p2pl_S", "P2pl")
        p3pl = state("p3pl_S", "P3pl")

        self.nom = nom = state("nom_ST", "Nom", terminal=True)
        dat = state("dat_ST", "Dat", terminal=True)
        acc = state("acc_ST", "Acc", terminal=True)
        abl = state("abl_ST", "Abl", terminal=True)
        loc = state("loc_ST", "Loc", terminal=True)
        ins = state("ins_ST", "Ins", terminal=True)
        gen = state("gen_ST", "Gen", terminal=True)
        equ = state("equ_ST", "Equ", terminal=True)

        # Number
        self.add_empty(self.noun, a3sg)
        add(self.noun, a3pl, "lAr")

        # Possession
        self.add_empty(a3sg, pnon)
        add(a3sg, p1sg, "+Im")
        add(a3sg, p2sg, "+In")
        add(a3sg, p3sg, "+sI")
        add(a3sg, p1pl, "+ImIz")
        add(a3sg, p2pl, "+InIz")
        add(a3sg, p3pl, "lArI")

        self.add_empty(a3pl, pnon)
        add(a3pl, p1sg, "Im")
        add(a3pl, p2sg, "In")
        add(a3pl, p3sg, "I")
        add(a3pl, p1pl, "ImIz")
        add(a3pl, p2pl, "InIz")
        add(a3pl, p3pl, "I")

        # Case after no or first/second person possession
        for source in (pnon, p1sg, p2sg, p1pl, p2pl):
            self.add_empty(source, nom)
            if source is pnon:
                # "içeri" is already dative on its own, but "içeriler" is not
                self.add_empty(
                    pnon, dat,
                    HasRootAttribute(RootAttribute.ImplicitDative)
                    & ~ContainsDerivation() & HasNoSurface(),
                )
            add(source, dat, "+yA")
            add(source, loc, ">dA")
            add(source, abl, ">dAn")
            add(source, acc, "+yI")
            add(source, gen, "+nIn")
            add(source, ins, "+ylA")
            add(source, equ, ">cA")

        # Case after third person possession takes the pronominal n
        for source in (p3sg, p3pl):
            self.add_empty(source, nom)
            add(source, dat, "nA")
            add(source, loc, "ndA")
            add(source, abl, "ndAn")
            add(source, acc, "nI")
            add(source, gen, "nIn")
            add(source, ins, "ylA")
            add(source, equ, "ncA")

        # Noun to noun derivations attach to a bare nominal only:
        # kitap-çık, but not kitap-lar-cık or kitab-ım-cık.
        dim = state("dim_S", "Dim", derivative=True)
        ness = state("ness_S", "Ness", derivative=True)
        agt = state("agt_S", "Agt", derivative=True)
        add(nom, dim, ">cI~k", HasNoSurface() & ~ContainsMorpheme(("Dim",)))
        add(nom, ness, "lI~k", HasNoSurface())
        add(nom, agt, ">cI", HasNoSurface() & ~ContainsMorpheme(("Agt",)))
        self.add_empty(dim, self.noun)
        self.add_empty(ness, self.noun)
        self.add_empty(agt, self.noun)

        self._with = state("with_S", "With", derivative=True)
        self._without = state("without_S", "Without", derivative=True)
        add(nom, self._with, "lI", HasNoSurface())
        add(nom, self._without, "sIz", HasNoSurface())

    # ── Adjectives ───────────────────────────────────────────────────────

    def _build_adjectives(self) -> None:
        self.adjective = self.add_root_state(
            PrimaryPos.Adjective, "adjectiveRoot_ST", "Adj", terminal=True,
        )
        self.add_empty(self._with, self.adjective)
        self.add_empty(self._without, self.adjective)

        # güzel -> güzel-Zero-Noun (güzeller, güzelliği)
        zero = self.add_state("adjZeroDeriv_S", "Zero", derivative=True)
        self.add_empty(self.adjective, zero)
        self.add_empty(zero, self.noun)

    def _build_uninflected(self) -> None:
        self.add_root_state(PrimaryPos.Adverb, "advRoot_ST", "Adv", terminal=True)
        self.add_root_state(PrimaryPos.Conjunction, "conjRoot_ST", "Conj", terminal=True)
        self.add_root_state(PrimaryPos.Interjection, "interjRoot_ST", "Interj", terminal=True)
        self.add_root_state(PrimaryPos.Postposition, "postpRoot_ST", "Postp", terminal=True)

    # ── Verbs ────────────────────────────────────────────────────────────

    def _build_verbs(self) -> None:
        add = self.add_transition
        state = self.add_state

        verb = self.verb = self.add_root_state(PrimaryPos.Verb, "verbRoot_S", "Verb")
        # başla -> başl-ıyor
        self.verb_root_vowel_drop = state("verbRoot_VowelDrop_S", "Verb", entry=True)

        neg = state("vNeg_S", "Neg")
        neg_prog = state("vNegProg1_S", "Neg")
        imp = state("vImp_S", "Imp")
        past = state("vPast_S", "Past")
        narr = state("vNarr_S", "Narr")
        prog = state("vProg1_S", "Prog1")
        aor = state("vAor_S", "Aor")
        neg_aor = state("vNegAor_S", "Aor")
        fut = state("vFut_S", "Fut")
        inf = state("vInf1_ST", "Inf1", terminal=True, derivative=True)

        a1sg = state("vA1sg_ST", "A1sg", terminal=True)
        a2sg = state("vA2sg_ST", "A2sg", terminal=True)
        a3sg = state("vA3sg_ST", "A3sg", terminal=True)
        a1pl = state("vA1pl_ST", "A1pl", terminal=True)
        a2pl = state("vA2pl_ST", "A2pl", terminal=True)
        a3pl = state("vA3pl_ST", "A3pl", terminal=True)

        # gel / gelme
        self.add_empty(verb, imp)
        self.add_empty(imp, a2sg)

        add(verb, neg, "mA")
        self.add_empty(neg, imp)
        # gel-m-iyor: the negative loses its vowel before -Iyor
        add(verb, neg_prog, "m")
        add(neg_prog, prog, "Iyor")

        for source in (verb, neg):
            add(source, past, ">dI")
            add(source, narr, "mIş")
            add(source, fut, "+yAcA~k")
            add(source, inf, "mAk")

        add(verb, prog, "Iyor", HasPhoneticAttribute(PhoneticAttribute.LastLetterConsonant))
        add(self.verb_root_vowel_drop, prog, "Iyor")

        add(verb, aor, "+Ar", HasRootAttribute(RootAttribute.Aorist_A))
        add(verb, aor, "+Ir", HasRootAttribute(RootAttribute.Aorist_I))
        add(neg, neg_aor, "z")

        # Person agreement after the past tense: geldim, geldin, geldik
        add(past, a1sg, "m")
        add(past, a2sg, "n")
        self.add_empty(past, a3sg)
        add(past, a1pl, "k")
        add(past, a2pl, "nIz")
        add(past, a3pl, "lAr")

        # ... and after the other tenses: geliyorum, geleceksin, gelmişiz
        for source in (narr, prog, aor, fut):
            add(source, a1sg, "+yIm")
            add(source, a2sg, "sIn")
            self.add_empty(source, a3sg)
            add(source, a1pl, "+yIz")
            add(source, a2pl, "sInIz")
            add(source, a3pl, "lAr")

        # gelmez, gelmezsin (first persons use a separate paradigm)
        add(neg_aor, a2sg, "sIn")
        self.add_empty(neg_aor, a3sg)
        add(neg_aor, a2pl, "sInIz")
        add(neg_aor, a3pl, "lAr")
