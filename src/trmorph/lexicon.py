"""
The root lexicon: dictionary items indexed by every stem spelling.

Each DictionaryItem produces one or more StemTransitions: its root as
written plus, for roots whose final sound changes before vowels, the
modified spelling ("kitap" -> "kitab").  Lookup proposes every stem that
is a prefix of the input; whether a modified stem is legal is decided
later, when the first suffix is matched.

Usage:
    from trmorph.lexicon import DictionaryItem, RootLexicon
    from trmorph.morphemes import PrimaryPos

    lex = RootLexicon([DictionaryItem.create("kitap", PrimaryPos.Noun)])
    for stem, remainder in lex.candidates_for_prefix("kitabım"):
        print(stem.surface, remainder)        # kitab ım
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from trmorph.alphabet import (
    PhoneticAttribute,
    calculate_phonetic_attributes,
    invert_harmony,
    is_vowel,
    last_vowel_index,
    voice,
)
from trmorph.morphemes import STEM_MODIFIERS, PrimaryPos, RootAttribute

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DictionaryItem:
    """A dictionary entry.  Immutable; results reference it, never copy it."""

    id: str
    lemma: str
    root: str
    pos: PrimaryPos
    attributes: frozenset[RootAttribute] = frozenset()

    @classmethod
    def create(
        cls,
        lemma: str,
        pos: PrimaryPos,
        root: str | None = None,
        attributes: Iterable[RootAttribute] = (),
    ) -> DictionaryItem:
        return cls(
            id=f"{lemma}_{pos.value}",
            lemma=lemma,
            root=root if root is not None else lemma,
            pos=pos,
            attributes=frozenset(attributes),
        )

    def has_attribute(self, attribute: RootAttribute) -> bool:
        return attribute in self.attributes

    def __str__(self) -> str:
        return f"{self.lemma} [{self.pos.value}]"


class StemVariant(Enum):
    ORIGINAL = "original"
    MODIFIED = "modified"  # voiced, doubled or vowel-dropped before a vowel
    PROGRESSIVE_DROP = "progressive-drop"  # başla -> başl(ıyor)


@dataclass(frozen=True, slots=True)
class StemTransition:
    """One spelling of a root together with its phonetic attributes."""

    surface: str
    item: DictionaryItem
    attributes: frozenset[PhoneticAttribute]
    variant: StemVariant = StemVariant.ORIGINAL

    def __str__(self) -> str:
        return f"{self.surface}({self.item.id})"


# ── Stem generation ─────────────────────────────────────────────────────────

_MODIFIED_STEM_ATTRIBUTES = frozenset({
    PhoneticAttribute.ExpectsVowel,
    PhoneticAttribute.CannotTerminate,
})


def _modify_root(root: str, attributes: frozenset[RootAttribute]) -> str:
    """Apply elision, doubling and voicing (in that order) to root."""
    modified = root
    if RootAttribute.LastVowelDrop in attributes and not is_vowel(modified[-1]):
        i = last_vowel_index(modified)
        if i > 0:
            modified = modified[:i] + modified[i + 1:]
    if RootAttribute.Doubling in attributes:
        modified = modified + modified[-1]
    if RootAttribute.Voicing in attributes and RootAttribute.NoVoicing not in attributes:
        previous = modified[-2] if len(modified) > 1 else None
        modified = modified[:-1] + voice(modified[-1], previous)
    return modified


def generate_stems(item: DictionaryItem) -> list[StemTransition]:
    """All stem spellings of item, the unmodified root first."""
    root = item.root
    if not root:
        return []

    attrs = calculate_phonetic_attributes(root)
    if RootAttribute.InverseHarmony in item.attributes:
        attrs = invert_harmony(attrs)

    stems: list[StemTransition] = []

    if item.attributes & STEM_MODIFIERS:
        modified = _modify_root(root, item.attributes)
        if modified != root:
            modified_attrs = calculate_phonetic_attributes(modified, attrs)
            if RootAttribute.InverseHarmony in item.attributes:
                modified_attrs = invert_harmony(modified_attrs)
            stems.append(StemTransition(
                root, item, attrs | {PhoneticAttribute.ExpectsConsonant},
            ))
            stems.append(StemTransition(
                modified, item, modified_attrs | _MODIFIED_STEM_ATTRIBUTES,
                StemVariant.MODIFIED,
            ))
        else:
            logger.warning("Root attributes of %s do not change its spelling", item.id)
            stems.append(StemTransition(root, item, attrs))
    else:
        stems.append(StemTransition(root, item, attrs))

    if (
        RootAttribute.ProgressiveVowelDrop in item.attributes
        and len(root) > 1
        and is_vowel(root[-1])
    ):
        dropped = root[:-1]
        stems.append(StemTransition(
            dropped, item, calculate_phonetic_attributes(dropped, attrs),
            StemVariant.PROGRESSIVE_DROP,
        ))

    return stems


# ── Lexicon ─────────────────────────────────────────────────────────────────

class RootLexicon:
    """
    Dictionary items indexed for candidate retrieval.

    Two indexes:
    - stem_index: stem spelling -> list[StemTransition]  (analysis)
    - id_index:   item id       -> DictionaryItem        (lookup)

    Built once in the constructor and read-only afterwards; safe to share
    between threads.
    """

    def __init__(self, items: Iterable[DictionaryItem] = ()):
        self.items: list[DictionaryItem] = []
        self.id_index: dict[str, DictionaryItem] = {}
        self.stem_index: dict[str, list[StemTransition]] = {}
        self.max_stem_length = 0

        for item in items:
            if item.id in self.id_index:
                logger.warning("Duplicate dictionary item %s ignored", item.id)
                continue
            self.items.append(item)
            self.id_index[item.id] = item
            for stem in generate_stems(item):
                self.stem_index.setdefault(stem.surface, []).append(stem)
                self.max_stem_length = max(self.max_stem_length, len(stem.surface))

        logger.info(
            "Root lexicon ready: %d items, %d stem spellings",
            len(self.items), len(self.stem_index),
        )

    @classmethod
    def from_items(cls, *items: DictionaryItem) -> RootLexicon:
        return cls(items)

    def merged(self, items: Iterable[DictionaryItem]) -> RootLexicon:
        """A new lexicon holding this lexicon's items plus items."""
        return RootLexicon([*self.items, *items])

    # ── Lookup ───────────────────────────────────────────────────────────

    def candidates_for_prefix(self, word: str) -> list[tuple[StemTransition, str]]:
        """Every stem that is a prefix of word with the unconsumed remainder,
        longest stem first.  An empty list means no root fits."""
        candidates: list[tuple[StemTransition, str]] = []
        for end in range(min(len(word), self.max_stem_length), 0, -1):
            stems = self.stem_index.get(word[:end])
            if stems:
                remainder = word[end:]
                candidates.extend((stem, remainder) for stem in stems)
        return candidates

    def stems(self, surface: str) -> list[StemTransition]:
        return self.stem_index.get(surface, [])

    def get_item(self, item_id: str) -> DictionaryItem | None:
        return self.id_index.get(item_id)

    def items_for_lemma(self, lemma: str) -> list[DictionaryItem]:
        return [item for item in self.items if item.lemma == lemma]

    # ── Iteration / stats ────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.id_index

    def __iter__(self) -> Iterator[DictionaryItem]:
        return iter(self.items)

    def summary(self) -> str:
        lines = [
            f"Items:          {len(self.items)}",
            f"Stem spellings: {len(self.stem_index)}",
            f"Longest stem:   {self.max_stem_length}",
            "",
            "POS breakdown:",
        ]
        pos_counts = Counter(item.pos for item in self.items)
        for pos, count in pos_counts.most_common():
            lines.append(f"  {pos.value:8s} {count:6d}")
        return "\n".join(lines)
