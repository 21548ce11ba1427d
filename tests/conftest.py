"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from trmorph.analyzer import InterpretingAnalyzer
from trmorph.dictionary import load_lines
from trmorph.morphotactics import TurkishMorphotactics


SAMPLE_LINES = [
    "elma",
    "el",
    "ev",
    "kitap",
    "kalem",
    "renk",
    "göz",
    "okul",
    "hak [A:Doubling]",
    "ağız [A:LastVowelDrop]",
    "burun [A:LastVowelDrop]",
    "saat [A:InverseHarmony, NoVoicing]",
    "içeri [A:ImplicitDative]",
    "güzel [P:Adj]",
    "gelmek",
    "gitmek [A:Voicing, Aorist_A]",
    "okumak",
    "başlamak",
    "yazmak",
    "ve [P:Conj]",
    "çok [P:Adv]",
]


def find_data(filename: str) -> Path | None:
    """Find a data file relative to the project root."""
    for base in [Path("data"), Path("../data")]:
        p = base / filename
        if p.exists():
            return p
    return None


@pytest.fixture(scope="session")
def graph() -> TurkishMorphotactics:
    return TurkishMorphotactics()


@pytest.fixture(scope="session")
def lexicon():
    return load_lines(SAMPLE_LINES)


@pytest.fixture(scope="session")
def analyzer(lexicon, graph) -> InterpretingAnalyzer:
    return InterpretingAnalyzer(lexicon, graph)


@pytest.fixture
def sample_dict() -> Path:
    """The bundled sample dictionary.  Skips the test if it is not found."""
    path = find_data("lexicon.dict")
    if path is None:
        pytest.skip("data/lexicon.dict not found")
    return path


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
