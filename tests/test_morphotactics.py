"""Tests for the morphotactic graph and its validation (morphotactics.py)."""

import pytest

from trmorph.analyzer import SearchPath
from trmorph.morphemes import MORPHEMES, PrimaryPos, get_morpheme
from trmorph.morphotactics import (
    MorphemeState,
    Morphotactics,
    MorphotacticsError,
    TurkishMorphotactics,
)


# ── Morpheme catalog ──────────────────────────────────────────────────────────

def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        MORPHEMES["X"] = get_morpheme("Noun")


def test_catalog_lookup():
    assert get_morpheme("P1sg").name == "FirstPersonSingularPossessive"
    assert get_morpheme("Noun").pos is PrimaryPos.Noun
    assert get_morpheme("Dim").derivational
    with pytest.raises(KeyError):
        get_morpheme("Bogus")


def test_pos_from_tag():
    assert PrimaryPos.from_tag("Adj") is PrimaryPos.Adjective
    assert PrimaryPos.from_tag("Adjective") is PrimaryPos.Adjective
    with pytest.raises(ValueError):
        PrimaryPos.from_tag("Pronoun")


# ── Turkish graph ─────────────────────────────────────────────────────────────

def test_every_category_has_a_root_state(graph):
    for pos in PrimaryPos:
        state = graph.root_state(pos)
        assert state.morpheme.pos is pos


def test_uninflected_roots_are_terminal(graph):
    for pos in (PrimaryPos.Adverb, PrimaryPos.Conjunction,
                PrimaryPos.Interjection, PrimaryPos.Postposition):
        assert graph.is_terminal(graph.root_state(pos))


def test_noun_root_is_not_terminal(graph):
    assert not graph.is_terminal(graph.root_state(PrimaryPos.Noun))


def test_transitions_keep_insertion_order(graph):
    noun = graph.root_state(PrimaryPos.Noun)
    assert [t.target.id for t in noun.outgoing] == ["a3sg_S", "a3pl_S"]
    assert [t.template.text for t in noun.outgoing] == ["", "lAr"]


def test_transition_morpheme_is_target_morpheme(graph):
    for t in graph.transitions:
        assert t.morpheme is t.target.morpheme


def test_outgoing_transitions_filters_by_condition(graph, lexicon):
    pnon = graph.states["pnon_S"]

    def path_for(word):
        stem, tail = lexicon.candidates_for_prefix(word)[0]
        return SearchPath.initial(word, stem, tail, pnon)

    plain = [t.target.id for t in graph.outgoing_transitions(pnon, path_for("elma"))]
    implicit = [t.target.id for t in graph.outgoing_transitions(pnon, path_for("içeri"))]
    assert len(implicit) == len(plain) + 1
    assert implicit.count("dat_ST") == 2


def test_derivative_states(graph):
    assert graph.states["dim_S"].derivative
    assert graph.states["adjZeroDeriv_S"].derivative
    assert not graph.states["p1sg_S"].derivative


def test_root_state_unknown_category():
    class NounsOnly(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            nom = self.add_state("nom_ST", "Nom", terminal=True)
            self.add_empty(noun, nom)

    with pytest.raises(KeyError):
        NounsOnly().root_state(PrimaryPos.Verb)


def test_summary(graph):
    s = graph.summary()
    assert "States:" in s
    assert "noun_S" in s
    assert "verbRoot_S" in s


def test_iterates_states(graph):
    ids = {s.id for s in graph}
    assert {"noun_S", "nom_ST", "vPast_S"} <= ids


# ── Validation ────────────────────────────────────────────────────────────────

def test_unknown_morpheme():
    class Bad(Morphotactics):
        def build(self):
            self.add_root_state(PrimaryPos.Noun, "noun_S", "Bogus")

    with pytest.raises(MorphotacticsError, match="Bogus"):
        Bad()


def test_duplicate_state_id():
    class Bad(Morphotactics):
        def build(self):
            self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun", terminal=True)
            self.add_state("noun_S", "Nom")

    with pytest.raises(MorphotacticsError, match="Duplicate"):
        Bad()


def test_unparsable_template():
    class Bad(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            nom = self.add_state("nom_ST", "Nom", terminal=True)
            self.add_transition(noun, nom, "l~Ar")

    with pytest.raises(MorphotacticsError, match="noun_S -> nom_ST"):
        Bad()


def test_transition_to_unregistered_state():
    class Bad(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            ghost = MorphemeState("ghost_ST", get_morpheme("Nom"), terminal=True)
            self.add_transition(noun, ghost, "lAr")

    with pytest.raises(MorphotacticsError, match="ghost_ST"):
        Bad()


def test_no_root_states():
    class Bad(Morphotactics):
        def build(self):
            self.add_state("nom_ST", "Nom", terminal=True)

    with pytest.raises(MorphotacticsError, match="no root states"):
        Bad()


def test_unreachable_state():
    class Bad(Morphotactics):
        def build(self):
            self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun", terminal=True)
            self.add_state("orphan_ST", "Nom", terminal=True)

    with pytest.raises(MorphotacticsError, match="orphan_ST"):
        Bad()


def test_non_terminal_dead_end():
    class Bad(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            a3sg = self.add_state("a3sg_S", "A3sg")
            self.add_empty(noun, a3sg)

    with pytest.raises(MorphotacticsError, match="a3sg_S"):
        Bad()


def test_empty_transition_cycle():
    class Bad(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            zero = self.add_state("zero_S", "Zero")
            nom = self.add_state("nom_ST", "Nom", terminal=True)
            self.add_empty(noun, zero)
            self.add_empty(zero, noun)
            self.add_transition(noun, nom, "lAr")

    with pytest.raises(MorphotacticsError, match="Cycle"):
        Bad()


def test_cycle_through_surface_is_allowed():
    class Loop(Morphotactics):
        def build(self):
            noun = self.add_root_state(PrimaryPos.Noun, "noun_S", "Noun")
            nom = self.add_state("nom_ST", "Nom", terminal=True)
            dim = self.add_state("dim_S", "Dim", derivative=True)
            self.add_empty(noun, nom)
            self.add_transition(nom, dim, ">cI~k")
            self.add_empty(dim, noun)

    assert len(Loop().transitions) == 3


def test_turkish_graph_builds():
    g = TurkishMorphotactics()
    assert len(g.states) > 40
