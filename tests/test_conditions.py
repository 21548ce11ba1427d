"""Tests for transition applicability predicates (conditions.py)."""

from types import SimpleNamespace

from trmorph.alphabet import PhoneticAttribute as PA
from trmorph.conditions import (
    AllOf,
    AnyOf,
    ContainsDerivation,
    ContainsMorpheme,
    HasNoSurface,
    HasPhoneticAttribute,
    HasRootAttribute,
    Not,
    PreviousMorphemeIs,
    RootPosIs,
)
from trmorph.lexicon import DictionaryItem
from trmorph.morphemes import PrimaryPos, RootAttribute as RA, get_morpheme


def _path(item=None, state_morpheme="Nom", attributes=(), morphemes=(),
          derived=False, has_surface=False):
    item = item or DictionaryItem.create("içeri", PrimaryPos.Noun, attributes=[RA.ImplicitDative])
    return SimpleNamespace(
        item=item,
        state=SimpleNamespace(morpheme=get_morpheme(state_morpheme)),
        attributes=frozenset(attributes),
        contains_morpheme=lambda m: m in morphemes,
        contains_derivation=derived,
        has_surface_since_derivation=has_surface,
    )


# ── Leaf predicates ───────────────────────────────────────────────────────────

def test_has_root_attribute():
    assert HasRootAttribute(RA.ImplicitDative).accept(_path())
    assert not HasRootAttribute(RA.Voicing).accept(_path())


def test_has_phonetic_attribute():
    p = _path(attributes=[PA.LastLetterConsonant])
    assert HasPhoneticAttribute(PA.LastLetterConsonant).accept(p)
    assert not HasPhoneticAttribute(PA.LastLetterVowel).accept(p)


def test_root_pos_is():
    assert RootPosIs(PrimaryPos.Noun).accept(_path())
    assert not RootPosIs(PrimaryPos.Verb).accept(_path())


def test_previous_morpheme_is():
    assert PreviousMorphemeIs("Pnon").accept(_path(state_morpheme="Pnon"))
    assert not PreviousMorphemeIs("Pnon").accept(_path(state_morpheme="P1sg"))


def test_contains_morpheme_any_of():
    p = _path(morphemes=("Noun", "Dim"))
    assert ContainsMorpheme(("Dim",)).accept(p)
    assert ContainsMorpheme(("Agt", "Dim")).accept(p)
    assert not ContainsMorpheme(("Agt",)).accept(p)


def test_contains_derivation():
    assert ContainsDerivation().accept(_path(derived=True))
    assert not ContainsDerivation().accept(_path())


def test_has_no_surface():
    assert HasNoSurface().accept(_path())
    assert not HasNoSurface().accept(_path(has_surface=True))


# ── Combinators ───────────────────────────────────────────────────────────────

def test_operators_build_combinators():
    a = HasRootAttribute(RA.ImplicitDative)
    b = ContainsDerivation()
    assert isinstance(a & b, AllOf)
    assert isinstance(a | b, AnyOf)
    assert isinstance(~b, Not)


def test_implicit_dative_condition():
    cond = HasRootAttribute(RA.ImplicitDative) & ~ContainsDerivation()
    assert cond.accept(_path())
    assert not cond.accept(_path(derived=True))


def test_any_of():
    cond = RootPosIs(PrimaryPos.Verb) | HasNoSurface()
    assert cond.accept(_path())
    assert not cond.accept(_path(has_surface=True))


def test_conditions_are_values():
    assert HasRootAttribute(RA.Voicing) == HasRootAttribute(RA.Voicing)
    assert hash(ContainsMorpheme(("Dim",))) == hash(ContainsMorpheme(("Dim",)))


def test_str():
    cond = HasNoSurface() & ~ContainsMorpheme(("Dim",))
    assert str(cond) == "(no-surface & !contains:Dim)"
