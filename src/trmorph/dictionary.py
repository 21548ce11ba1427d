"""
Line-oriented Turkish dictionary loader.

One entry per line, optional bracketed annotations, ``#`` comments:

    elma
    kitap
    gelmek                      # verb, root "gel"
    içeri [P:Noun; A:ImplicitDative]
    hak [A:Doubling]
    ağız [A:LastVowelDrop]
    saat [A:InverseHarmony, NoVoicing]
    git [P:Verb; A:Voicing, Aorist_A]

Annotation keys:
    P   part of speech (Noun, Adj, Verb, Adv, Conj, Interj, Postp)
    A   comma-separated root attributes
    R   root spelling when it differs from the lemma

Attributes the line does not spell out are inferred (voicing of long
nominal roots ending in a stop, aorist class and vowel drop for verbs).

Usage:
    from trmorph.dictionary import load_file

    lexicon = load_file("data/lexicon.dict")
    print(lexicon.summary())
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from trmorph.alphabet import VOICELESS_STOPS, is_vowel, lower, vowel_count
from trmorph.lexicon import DictionaryItem, RootLexicon
from trmorph.morphemes import PrimaryPos, RootAttribute

logger = logging.getLogger(__name__)


class DictionaryFormatError(ValueError):
    """A dictionary line could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None, source: str | None = None):
        self.line_number = line_number
        self.source = source
        where = ""
        if source is not None:
            where = f"{source}:"
        if line_number is not None:
            where += f"{line_number}: "
        elif where:
            where += " "
        super().__init__(f"{where}{message}")


# One-syllable verbs whose aorist is -Ir rather than -Ar (gelir, alır, olur).
IRREGULAR_AORIST_I = frozenset({
    "al", "bil", "bul", "dur", "gel", "gör", "kal",
    "ol", "öl", "san", "var", "ver", "vur",
})

_LINE_RE = re.compile(r"^(?P<lemma>[^\[\]]+?)\s*(?:\[(?P<meta>[^\]]*)\])?$")
_INFINITIVE_SUFFIXES = ("mek", "mak")


def _strip_comment(line: str) -> str:
    i = line.find("#")
    return line if i < 0 else line[:i]


def _parse_meta(meta: str) -> dict[str, str]:
    """Split "P:Noun; A:Voicing, Doubling" into {"P": ..., "A": ...}."""
    fields: dict[str, str] = {}
    for chunk in meta.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, sep, value = chunk.partition(":")
        key = key.strip()
        if not sep or key not in ("P", "A", "R"):
            raise DictionaryFormatError(f"Malformed annotation {chunk!r}")
        if key in fields:
            raise DictionaryFormatError(f"Annotation {key!r} given twice")
        fields[key] = value.strip()
    return fields


def _is_infinitive(lemma: str) -> bool:
    return len(lemma) > 3 and lemma.endswith(_INFINITIVE_SUFFIXES)


def infer_attributes(
    root: str,
    pos: PrimaryPos,
    declared: frozenset[RootAttribute],
) -> frozenset[RootAttribute]:
    """Add the attributes a root has by default to the declared ones."""
    attrs = set(declared)

    if pos in (PrimaryPos.Noun, PrimaryPos.Adjective):
        # kitap -> kitabı, renk -> rengi; kök, at stay as they are
        if (
            RootAttribute.NoVoicing not in attrs
            and RootAttribute.InverseHarmony not in attrs
            and RootAttribute.Doubling not in attrs
            and (
                (vowel_count(root) > 1 and root[-1] in VOICELESS_STOPS)
                or root.endswith("nk")
            )
        ):
            attrs.add(RootAttribute.Voicing)

    elif pos is PrimaryPos.Verb:
        if is_vowel(root[-1]):
            # başla -> başlıyor, başlar
            attrs.add(RootAttribute.ProgressiveVowelDrop)
            if RootAttribute.Aorist_A not in attrs:
                attrs.add(RootAttribute.Aorist_I)
        elif not attrs & {RootAttribute.Aorist_A, RootAttribute.Aorist_I}:
            if vowel_count(root) == 1 and root not in IRREGULAR_AORIST_I:
                attrs.add(RootAttribute.Aorist_A)
            else:
                attrs.add(RootAttribute.Aorist_I)

    return frozenset(attrs)


def parse_line(line: str) -> DictionaryItem | None:
    """Parse one dictionary line.  Blank and comment-only lines give None."""
    text = _strip_comment(line).strip()
    if not text:
        return None

    m = _LINE_RE.match(text)
    if m is None:
        raise DictionaryFormatError(f"Cannot parse line {text!r}")

    lemma = lower(m.group("lemma").strip())
    if " " in lemma:
        raise DictionaryFormatError(f"Multi-word entries are not supported: {lemma!r}")
    meta = _parse_meta(m.group("meta") or "")

    if "P" in meta:
        try:
            pos = PrimaryPos.from_tag(meta["P"].split(",")[0].strip())
        except ValueError as e:
            raise DictionaryFormatError(str(e)) from None
    elif _is_infinitive(lemma):
        pos = PrimaryPos.Verb
    else:
        pos = PrimaryPos.Noun

    declared: set[RootAttribute] = set()
    if meta.get("A"):
        for name in meta["A"].split(","):
            name = name.strip()
            if not name:
                continue
            try:
                declared.add(RootAttribute.from_name(name))
            except ValueError as e:
                raise DictionaryFormatError(str(e)) from None

    if "R" in meta:
        root = lower(meta["R"])
        if not root:
            raise DictionaryFormatError("Empty root annotation")
    elif pos is PrimaryPos.Verb and _is_infinitive(lemma):
        root = lemma[:-3]
    else:
        root = lemma

    attributes = infer_attributes(root, pos, frozenset(declared))
    return DictionaryItem.create(lemma, pos, root=root, attributes=attributes)


def parse_lines(lines: Iterable[str], source: str | None = None) -> list[DictionaryItem]:
    """Parse lines into items, skipping blanks and comments."""
    items: list[DictionaryItem] = []
    for number, line in enumerate(lines, start=1):
        try:
            item = parse_line(line)
        except DictionaryFormatError as e:
            raise DictionaryFormatError(str(e), number, source) from None
        if item is not None:
            items.append(item)
    return items


def load_lines(lines: Iterable[str]) -> RootLexicon:
    """Build a lexicon from dictionary lines held in memory."""
    return RootLexicon(parse_lines(lines))


def read_file(path: str | Path) -> list[DictionaryItem]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary not found: {path}")
    with path.open(encoding="utf-8-sig") as f:
        items = parse_lines(f, source=str(path))
    logger.info("Loaded %d dictionary items from %s", len(items), path)
    return items


def load_file(path: str | Path) -> RootLexicon:
    return RootLexicon(read_file(path))


def load_files(*paths: str | Path) -> RootLexicon:
    """Load and merge several dictionary files into one lexicon."""
    items: list[DictionaryItem] = []
    for p in paths:
        items.extend(read_file(p))
    return RootLexicon(items)
