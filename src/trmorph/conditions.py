"""
Applicability predicates for morphotactic transitions.

The set of predicates is closed: each is a small frozen dataclass with an
``accept(path)`` method over a search path.  They combine with ``&``, ``|``
and ``~``:

    HasRootAttribute(RootAttribute.ImplicitDative) & ~ContainsDerivation()

A path exposes ``item``, ``state``, ``attributes``, ``contains_morpheme()``,
``contains_derivation`` and ``has_surface_since_derivation``; see
``trmorph.analyzer.SearchPath``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from trmorph.alphabet import PhoneticAttribute
from trmorph.morphemes import PrimaryPos, RootAttribute

if TYPE_CHECKING:
    from trmorph.analyzer import SearchPath


class Condition:
    """Base class; subclasses implement accept()."""

    __slots__ = ()

    def accept(self, path: SearchPath) -> bool:
        raise NotImplementedError

    def __and__(self, other: Condition) -> Condition:
        return AllOf((self, other))

    def __or__(self, other: Condition) -> Condition:
        return AnyOf((self, other))

    def __invert__(self) -> Condition:
        return Not(self)


@dataclass(frozen=True, slots=True)
class HasRootAttribute(Condition):
    attribute: RootAttribute

    def accept(self, path: SearchPath) -> bool:
        return self.attribute in path.item.attributes

    def __str__(self) -> str:
        return f"root:{self.attribute.value}"


@dataclass(frozen=True, slots=True)
class HasPhoneticAttribute(Condition):
    attribute: PhoneticAttribute

    def accept(self, path: SearchPath) -> bool:
        return self.attribute in path.attributes

    def __str__(self) -> str:
        return f"phonetic:{self.attribute.name}"


@dataclass(frozen=True, slots=True)
class RootPosIs(Condition):
    pos: PrimaryPos

    def accept(self, path: SearchPath) -> bool:
        return path.item.pos is self.pos

    def __str__(self) -> str:
        return f"pos:{self.pos.value}"


@dataclass(frozen=True, slots=True)
class PreviousMorphemeIs(Condition):
    morpheme_id: str

    def accept(self, path: SearchPath) -> bool:
        return path.state.morpheme.id == self.morpheme_id

    def __str__(self) -> str:
        return f"previous:{self.morpheme_id}"


@dataclass(frozen=True, slots=True)
class ContainsMorpheme(Condition):
    """True if any morpheme already on the path has one of the ids."""

    morpheme_ids: tuple[str, ...]

    def accept(self, path: SearchPath) -> bool:
        return any(path.contains_morpheme(m) for m in self.morpheme_ids)

    def __str__(self) -> str:
        return f"contains:{','.join(self.morpheme_ids)}"


@dataclass(frozen=True, slots=True)
class ContainsDerivation(Condition):
    def accept(self, path: SearchPath) -> bool:
        return path.contains_derivation

    def __str__(self) -> str:
        return "derived"


@dataclass(frozen=True, slots=True)
class HasNoSurface(Condition):
    """No suffix letters since the root or the last derivation."""

    def accept(self, path: SearchPath) -> bool:
        return not path.has_surface_since_derivation

    def __str__(self) -> str:
        return "no-surface"


@dataclass(frozen=True, slots=True)
class AllOf(Condition):
    conditions: tuple[Condition, ...]

    def accept(self, path: SearchPath) -> bool:
        return all(c.accept(path) for c in self.conditions)

    def __str__(self) -> str:
        return "(" + " & ".join(str(c) for c in self.conditions) + ")"


@dataclass(frozen=True, slots=True)
class AnyOf(Condition):
    conditions: tuple[Condition, ...]

    def accept(self, path: SearchPath) -> bool:
        return any(c.accept(path) for c in self.conditions)

    def __str__(self) -> str:
        return "(" + " | ".join(str(c) for c in self.conditions) + ")"


@dataclass(frozen=True, slots=True)
class Not(Condition):
    condition: Condition

    def accept(self, path: SearchPath) -> bool:
        return not self.condition.accept(path)

    def __str__(self) -> str:
        return f"!{self.condition}"
