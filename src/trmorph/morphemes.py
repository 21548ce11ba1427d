"""
Morpheme catalog, part-of-speech tags and root attributes.

The catalog is built once at import time and exposed read-only; every
morphotactic state references one of these Morpheme objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class PrimaryPos(Enum):
    """Primary category of a dictionary item.  The value is the short tag
    used in item ids (``elma_Noun``) and in formatted analyses."""

    Noun = "Noun"
    Adjective = "Adj"
    Verb = "Verb"
    Adverb = "Adv"
    Conjunction = "Conj"
    Interjection = "Interj"
    Postposition = "Postp"

    @classmethod
    def from_tag(cls, tag: str) -> PrimaryPos:
        """Accept either the short tag ("Adj") or the full name ("Adjective")."""
        for pos in cls:
            if tag == pos.value or tag == pos.name:
                return pos
        raise ValueError(f"Unknown part of speech: {tag!r}")


class RootAttribute(Enum):
    """Dictionary flags that override default phonological behaviour."""

    Voicing = "Voicing"
    NoVoicing = "NoVoicing"
    InverseHarmony = "InverseHarmony"
    Doubling = "Doubling"
    LastVowelDrop = "LastVowelDrop"
    ProgressiveVowelDrop = "ProgressiveVowelDrop"
    Aorist_A = "Aorist_A"
    Aorist_I = "Aorist_I"
    ImplicitDative = "ImplicitDative"

    @classmethod
    def from_name(cls, name: str) -> RootAttribute:
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown root attribute: {name!r}") from None


# Attributes that make a root produce a second, modified stem spelling.
STEM_MODIFIERS = frozenset({
    RootAttribute.Voicing,
    RootAttribute.Doubling,
    RootAttribute.LastVowelDrop,
})


@dataclass(frozen=True, slots=True)
class Morpheme:
    """An abstract grammatical unit (plural, possessive, dative ...)."""

    id: str
    name: str
    pos: PrimaryPos | None = None  # set for part-of-speech morphemes
    derivational: bool = False

    def __str__(self) -> str:
        return self.id


_CATALOG: tuple[Morpheme, ...] = (
    # Part of speech
    Morpheme("Noun", "Noun", pos=PrimaryPos.Noun),
    Morpheme("Adj", "Adjective", pos=PrimaryPos.Adjective),
    Morpheme("Verb", "Verb", pos=PrimaryPos.Verb),
    Morpheme("Adv", "Adverb", pos=PrimaryPos.Adverb),
    Morpheme("Conj", "Conjunction", pos=PrimaryPos.Conjunction),
    Morpheme("Interj", "Interjection", pos=PrimaryPos.Interjection),
    Morpheme("Postp", "Postposition", pos=PrimaryPos.Postposition),
    # Agreement
    Morpheme("A1sg", "FirstPersonSingular"),
    Morpheme("A2sg", "SecondPersonSingular"),
    Morpheme("A3sg", "ThirdPersonSingular"),
    Morpheme("A1pl", "FirstPersonPlural"),
    Morpheme("A2pl", "SecondPersonPlural"),
    Morpheme("A3pl", "ThirdPersonPlural"),
    # Possessive
    Morpheme("Pnon", "NoPosession"),
    Morpheme("P1sg", "FirstPersonSingularPossessive"),
    Morpheme("P2sg", "SecondPersonSingularPossessive"),
    Morpheme("P3sg", "ThirdPersonSingularPossessive"),
    Morpheme("P1pl", "FirstPersonPluralPossessive"),
    Morpheme("P2pl", "SecondPersonPluralPossessive"),
    Morpheme("P3pl", "ThirdPersonPluralPossessive"),
    # Case
    Morpheme("Nom", "Nominal"),
    Morpheme("Dat", "Dative"),
    Morpheme("Acc", "Accusative"),
    Morpheme("Abl", "Ablative"),
    Morpheme("Loc", "Locative"),
    Morpheme("Ins", "Instrumental"),
    Morpheme("Gen", "Genitive"),
    Morpheme("Equ", "Equ"),
    # Derivation
    Morpheme("Dim", "Diminutive", derivational=True),
    Morpheme("Ness", "Ness", derivational=True),
    Morpheme("With", "With", derivational=True),
    Morpheme("Without", "Without", derivational=True),
    Morpheme("Agt", "Agentive", derivational=True),
    Morpheme("Zero", "Zero", derivational=True),
    Morpheme("Inf1", "Infinitive1", derivational=True),
    # Verbal
    Morpheme("Neg", "Negative"),
    Morpheme("Imp", "Imperative"),
    Morpheme("Past", "PastTense"),
    Morpheme("Narr", "NarrativeTense"),
    Morpheme("Prog1", "Progressive1"),
    Morpheme("Aor", "Aorist"),
    Morpheme("Fut", "Future"),
)

MORPHEMES: MappingProxyType[str, Morpheme] = MappingProxyType({m.id: m for m in _CATALOG})


def get_morpheme(morpheme_id: str) -> Morpheme:
    """Look up a morpheme by id; KeyError if it is not in the catalog."""
    return MORPHEMES[morpheme_id]
