"""
Turkish letters and the phonetic attributes derived from them.

Everything here is a pure function of its arguments; the letter tables are
module-level constants shared by the lexicon, the surface generator and the
analyzer.

Usage:
    from trmorph.alphabet import calculate_phonetic_attributes, PhoneticAttribute

    attrs = calculate_phonetic_attributes("kitap")
    PhoneticAttribute.LastLetterVoicelessStop in attrs   # True
"""

from __future__ import annotations

from enum import Enum


# ── Letter classes ──────────────────────────────────────────────────────────

VOWELS = frozenset("aeıioöuüâîû")
BACK_VOWELS = frozenset("aıouâû")
FRONT_VOWELS = frozenset("eiöüî")
ROUNDED_VOWELS = frozenset("oöuüû")

# "fıstıkçı şahap" holds every voiceless consonant of the alphabet
VOICELESS_CONSONANTS = frozenset("fstkçşhp")
VOICELESS_STOPS = frozenset("pçtk")

LETTERS = frozenset("abcçdefgğhıijklmnoöprsştuüvyzâîûqwx")

# Stop consonant alternations at morpheme boundaries.
_VOICING: dict[str, str] = {"p": "b", "ç": "c", "t": "d", "k": "ğ", "g": "ğ"}
_DEVOICING: dict[str, str] = {"b": "p", "c": "ç", "d": "t", "g": "k", "ğ": "k"}


class PhoneticAttribute(Enum):
    """Phonetic facts about the end (and start) of a letter sequence."""

    LastLetterVowel = "LLV"
    LastLetterConsonant = "LLC"
    LastVowelFrontal = "LVF"
    LastVowelBack = "LVB"
    LastVowelRounded = "LVR"
    LastVowelUnrounded = "LVuR"
    LastLetterVoiceless = "LLVless"
    LastLetterVoiced = "LLVo"
    LastLetterVoicelessStop = "LLVlessStop"
    FirstLetterVowel = "FLV"
    FirstLetterConsonant = "FLC"
    HasNoVowel = "NoVow"
    # Set on stems and suffix variants, not derived from letters.
    ExpectsVowel = "EV"
    ExpectsConsonant = "EC"
    CannotTerminate = "CT"


_VOWEL_ATTRIBUTES = frozenset({
    PhoneticAttribute.LastVowelFrontal,
    PhoneticAttribute.LastVowelBack,
    PhoneticAttribute.LastVowelRounded,
    PhoneticAttribute.LastVowelUnrounded,
})


# ── Letter helpers ──────────────────────────────────────────────────────────

def is_vowel(ch: str) -> bool:
    return ch in VOWELS


def is_voiceless(ch: str) -> bool:
    return ch in VOICELESS_CONSONANTS


def last_vowel(seq: str) -> str | None:
    """Return the last vowel of seq, or None if it has none."""
    for ch in reversed(seq):
        if ch in VOWELS:
            return ch
    return None


def last_vowel_index(seq: str) -> int:
    """Index of the last vowel in seq, -1 if there is none."""
    for i in range(len(seq) - 1, -1, -1):
        if seq[i] in VOWELS:
            return i
    return -1


def vowel_count(seq: str) -> int:
    return sum(1 for ch in seq if ch in VOWELS)


def voice(ch: str, previous: str | None = None) -> str:
    """Voiced counterpart of a stop consonant ("p" -> "b").

    "k" after "n" becomes "g" (renk -> rengi), otherwise "ğ" (kitapçık ->
    kitapçığı).  Letters without a counterpart are returned unchanged.
    """
    if ch == "k" and previous == "n":
        return "g"
    return _VOICING.get(ch, ch)


def devoice(ch: str) -> str:
    """Voiceless counterpart of a voiced stop ("d" -> "t")."""
    return _DEVOICING.get(ch, ch)


def lower(text: str) -> str:
    """Turkish-aware lower-casing (I -> ı, İ -> i)."""
    return text.replace("I", "ı").replace("İ", "i").lower()


def normalize(word: str) -> str:
    """Normalize an input word for analysis.  Only casing changes; any
    other character, whitespace included, is left for the analyzer to
    reject."""
    return lower(word)


def is_turkish_word(seq: str) -> bool:
    """True if every character belongs to the Turkish alphabet."""
    return bool(seq) and all(ch in LETTERS for ch in seq)


# ── Phonetic attributes ─────────────────────────────────────────────────────

def vowel_attributes(ch: str) -> set[PhoneticAttribute]:
    """Harmony attributes of a single vowel."""
    attrs: set[PhoneticAttribute] = set()
    if ch in BACK_VOWELS:
        attrs.add(PhoneticAttribute.LastVowelBack)
    else:
        attrs.add(PhoneticAttribute.LastVowelFrontal)
    if ch in ROUNDED_VOWELS:
        attrs.add(PhoneticAttribute.LastVowelRounded)
    else:
        attrs.add(PhoneticAttribute.LastVowelUnrounded)
    return attrs


def calculate_phonetic_attributes(
    seq: str,
    predecessor: frozenset[PhoneticAttribute] = frozenset(),
) -> frozenset[PhoneticAttribute]:
    """Compute the phonetic attributes of seq appended after predecessor.

    An empty seq adds no letters, so the predecessor's attributes carry over
    unchanged (including ExpectsVowel / CannotTerminate).  A seq without
    vowels takes its vowel attributes from the predecessor.
    """
    if not seq:
        return predecessor

    attrs: set[PhoneticAttribute] = set()
    last = seq[-1]
    if last in VOWELS:
        attrs.add(PhoneticAttribute.LastLetterVowel)
        attrs.add(PhoneticAttribute.LastLetterVoiced)
    else:
        attrs.add(PhoneticAttribute.LastLetterConsonant)
        if last in VOICELESS_CONSONANTS:
            attrs.add(PhoneticAttribute.LastLetterVoiceless)
            if last in VOICELESS_STOPS:
                attrs.add(PhoneticAttribute.LastLetterVoicelessStop)
        else:
            attrs.add(PhoneticAttribute.LastLetterVoiced)

    if seq[0] in VOWELS:
        attrs.add(PhoneticAttribute.FirstLetterVowel)
    else:
        attrs.add(PhoneticAttribute.FirstLetterConsonant)

    vowel = last_vowel(seq)
    if vowel is not None:
        attrs |= vowel_attributes(vowel)
    else:
        inherited = predecessor & _VOWEL_ATTRIBUTES
        if inherited:
            attrs |= inherited
        else:
            attrs.add(PhoneticAttribute.HasNoVowel)

    return frozenset(attrs)


def invert_harmony(attrs: frozenset[PhoneticAttribute]) -> frozenset[PhoneticAttribute]:
    """Swap back vowel harmony for front (saat -> saate)."""
    if PhoneticAttribute.LastVowelBack not in attrs:
        return attrs
    return (attrs - {PhoneticAttribute.LastVowelBack}) | {PhoneticAttribute.LastVowelFrontal}
