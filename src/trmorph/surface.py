"""
Suffix templates and the phonetic rules that turn them into letters.

A template describes a morpheme's underlying form, e.g. ``+yA`` for the
dative or ``>cI~k`` for the diminutive.  ``materialize`` renders it against
the phonetic attributes of whatever precedes it:

    materialize(SuffixTemplate.parse("+yA"), calculate_phonetic_attributes("elma"))   # "ya"
    materialize(SuffixTemplate.parse(">dA"), calculate_phonetic_attributes("kitap"))  # "ta"

Template tokens:
    letter   literal letter
    A        a / e by the last vowel's backness
    I        ı / i / u / ü by backness and rounding
    +x       x only after a vowel; +A / +I: the vowel only after a consonant
    >x       x devoiced after a voiceless letter (d -> t, c -> ç)
    ~x       final letter with a voiced variant used before vowels (k -> ğ)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trmorph.alphabet import (
    LETTERS,
    VOWELS,
    BACK_VOWELS,
    ROUNDED_VOWELS,
    VOICELESS_CONSONANTS,
    PhoneticAttribute,
    devoice,
    last_vowel,
    voice,
)


class TemplateError(ValueError):
    """A suffix template string could not be parsed."""


class TokenKind(Enum):
    LETTER = "letter"
    A_VOWEL = "A"
    I_VOWEL = "I"
    APPEND = "+"
    DEVOICE_FIRST = ">"
    VOICE_LAST = "~"


@dataclass(frozen=True, slots=True)
class TemplateToken:
    kind: TokenKind
    letter: str = ""


def tokenize(template: str) -> tuple[TemplateToken, ...]:
    """Split a template string into tokens, validating its syntax."""
    tokens: list[TemplateToken] = []
    i = 0
    while i < len(template):
        ch = template[i]
        if ch in "+>~":
            if i + 1 >= len(template):
                raise TemplateError(f"{template!r}: {ch!r} must be followed by a letter")
            nxt = template[i + 1]
            if nxt not in LETTERS and nxt not in "AI":
                raise TemplateError(f"{template!r}: invalid letter {nxt!r} after {ch!r}")
            if ch == "+":
                tokens.append(TemplateToken(TokenKind.APPEND, nxt))
            elif ch == ">":
                if nxt in "AI":
                    raise TemplateError(f"{template!r}: '>' applies to consonants only")
                tokens.append(TemplateToken(TokenKind.DEVOICE_FIRST, nxt))
            else:
                if i + 2 != len(template):
                    raise TemplateError(f"{template!r}: '~' is only allowed on the last letter")
                if nxt in "AI" or nxt in VOWELS:
                    raise TemplateError(f"{template!r}: '~' applies to consonants only")
                tokens.append(TemplateToken(TokenKind.VOICE_LAST, nxt))
            i += 2
            continue
        if ch == "A":
            tokens.append(TemplateToken(TokenKind.A_VOWEL))
        elif ch == "I":
            tokens.append(TemplateToken(TokenKind.I_VOWEL))
        elif ch in LETTERS:
            tokens.append(TemplateToken(TokenKind.LETTER, ch))
        else:
            raise TemplateError(f"{template!r}: unexpected character {ch!r}")
        i += 1
    return tuple(tokens)


@dataclass(frozen=True, slots=True)
class SuffixTemplate:
    """A parsed suffix template.  The empty template is a zero morpheme."""

    text: str
    tokens: tuple[TemplateToken, ...]

    @classmethod
    def parse(cls, text: str) -> SuffixTemplate:
        return cls(text=text, tokens=tokenize(text))

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def voices_last(self) -> bool:
        return bool(self.tokens) and self.tokens[-1].kind is TokenKind.VOICE_LAST

    def __str__(self) -> str:
        return self.text


EMPTY_TEMPLATE = SuffixTemplate("", ())


# ── Rendering ───────────────────────────────────────────────────────────────

def _back(out: list[str], attrs: frozenset[PhoneticAttribute]) -> bool:
    vowel = last_vowel("".join(out))
    if vowel is not None:
        return vowel in BACK_VOWELS
    return PhoneticAttribute.LastVowelBack in attrs


def _rounded(out: list[str], attrs: frozenset[PhoneticAttribute]) -> bool:
    vowel = last_vowel("".join(out))
    if vowel is not None:
        return vowel in ROUNDED_VOWELS
    return PhoneticAttribute.LastVowelRounded in attrs


def _ends_with_vowel(out: list[str], attrs: frozenset[PhoneticAttribute]) -> bool:
    if out:
        return out[-1] in VOWELS
    return PhoneticAttribute.LastLetterVowel in attrs


def _ends_voiceless(out: list[str], attrs: frozenset[PhoneticAttribute]) -> bool:
    if out:
        return out[-1] in VOICELESS_CONSONANTS
    return PhoneticAttribute.LastLetterVoiceless in attrs


def _harmony_a(out: list[str], attrs: frozenset[PhoneticAttribute]) -> str:
    return "a" if _back(out, attrs) else "e"


def _harmony_i(out: list[str], attrs: frozenset[PhoneticAttribute]) -> str:
    if _back(out, attrs):
        return "u" if _rounded(out, attrs) else "ı"
    return "ü" if _rounded(out, attrs) else "i"


def materialize(template: SuffixTemplate, attrs: frozenset[PhoneticAttribute]) -> str:
    """Render template after a sequence with the given phonetic attributes.

    Pure function: the same template and attributes always give the same
    letters.  Harmony inside the suffix follows the letters produced so far
    ("lArI" -> "ları" / "leri").
    """
    out: list[str] = []
    for token in template.tokens:
        kind = token.kind
        if kind is TokenKind.LETTER or kind is TokenKind.VOICE_LAST:
            out.append(token.letter)
        elif kind is TokenKind.A_VOWEL:
            out.append(_harmony_a(out, attrs))
        elif kind is TokenKind.I_VOWEL:
            out.append(_harmony_i(out, attrs))
        elif kind is TokenKind.APPEND:
            ends_with_vowel = _ends_with_vowel(out, attrs)
            if token.letter == "A":
                if not ends_with_vowel:
                    out.append(_harmony_a(out, attrs))
            elif token.letter == "I":
                if not ends_with_vowel:
                    out.append(_harmony_i(out, attrs))
            elif ends_with_vowel:
                out.append(token.letter)
        elif kind is TokenKind.DEVOICE_FIRST:
            if _ends_voiceless(out, attrs):
                out.append(devoice(token.letter))
            else:
                out.append(token.letter)
    return "".join(out)


def voiced_variant(surface: str) -> str:
    """Spelling of a ``~`` suffix when a vowel-initial suffix follows."""
    if not surface:
        return surface
    previous = surface[-2] if len(surface) > 1 else None
    return surface[:-1] + voice(surface[-1], previous)


def surface_forms(
    template: SuffixTemplate,
    attrs: frozenset[PhoneticAttribute],
) -> list[tuple[str, frozenset[PhoneticAttribute]]]:
    """Every spelling of template after attrs, each with the attributes it
    adds on top of its letters.

    A ``~`` template yields its plain spelling and the voiced one; the voiced
    spelling must be followed by a vowel and cannot end a word.
    """
    surface = materialize(template, attrs)
    forms = [(surface, frozenset())]
    if template.voices_last:
        voiced = voiced_variant(surface)
        if voiced != surface:
            forms.append((voiced, frozenset({
                PhoneticAttribute.ExpectsVowel,
                PhoneticAttribute.CannotTerminate,
            })))
    return forms
