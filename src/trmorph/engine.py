"""
Morphological analysis engine with TOML-based configuration.

Owns one root lexicon and one morphotactic graph, and hands out analyses
from a shared InterpretingAnalyzer.

Usage:
    from trmorph.engine import MorphEngine

    engine = MorphEngine.from_config()          # loads trmorph.toml
    results = engine.analyze("kitabım")
    batch = engine.analyze_batch(["elmalar", "içeri"], max_workers=4)

    # Or build manually:
    engine = MorphEngine()
    engine.add_lexicon("data/*.dict")
    engine.add_entries(["kitap", "içeri [A:ImplicitDative]"])
"""

from __future__ import annotations

import glob
import logging
import tomllib
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

from trmorph.analyzer import AnalysisResult, InterpretingAnalyzer
from trmorph.dictionary import parse_lines, read_file
from trmorph.lexicon import RootLexicon
from trmorph.morphotactics import Morphotactics, TurkishMorphotactics
from trmorph.trace import AnalysisDebugData

logger = logging.getLogger(__name__)


class MorphEngine:
    """Lexicon plus graph plus analyzer behind a single interface.

    The lexicon is rebuilt whenever entries are added; the graph is built
    once.  After loading, analyze() may be called from any number of
    threads.
    """

    def __init__(
        self,
        lexicon: RootLexicon | None = None,
        morphotactics: Morphotactics | None = None,
    ):
        self.morphotactics = morphotactics if morphotactics is not None else TurkishMorphotactics()
        self.lexicon = lexicon if lexicon is not None else RootLexicon()
        self.analyzer = InterpretingAnalyzer(self.lexicon, self.morphotactics)
        self.sources: list[Path] = []
        self.config: dict[str, Any] = {}

    # ── Construction helpers ─────────────────────────────────────────────

    def add_lexicon(self, *paths: str | Path) -> None:
        """Merge one or more dictionary files (glob patterns allowed)."""
        resolved = _expand_paths(paths)
        if not resolved:
            logger.warning("No dictionary files matched %s", [str(p) for p in paths])
            return
        items = []
        for path in resolved:
            items.extend(read_file(path))
        self._set_lexicon(self.lexicon.merged(items))
        self.sources.extend(resolved)

    def add_entries(self, lines: Iterable[str]) -> None:
        """Merge dictionary lines held in memory."""
        self._set_lexicon(self.lexicon.merged(parse_lines(lines)))

    def _set_lexicon(self, lexicon: RootLexicon) -> None:
        self.lexicon = lexicon
        self.analyzer = InterpretingAnalyzer(lexicon, self.morphotactics)

    @classmethod
    def from_config(cls, config_path: str | Path = "trmorph.toml") -> MorphEngine:
        """Build a MorphEngine from a TOML config file.

        Paths in the config are resolved relative to the config file's
        directory.  Glob patterns in paths are expanded.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        with config_path.open("rb") as f:
            cfg = tomllib.load(f)

        base_dir = config_path.parent
        engine = cls()
        engine.config = cfg

        lex_cfg = cfg.get("lexicon", {})
        lex_paths = lex_cfg.get("paths", [])
        if lex_paths:
            resolved = _resolve_config_paths(lex_paths, base_dir)
            if resolved:
                engine.add_lexicon(*resolved)
        entries = lex_cfg.get("entries", [])
        if entries:
            engine.add_entries(entries)

        logger.info("Engine configured from %s", config_path)
        return engine

    # ── Analysis ─────────────────────────────────────────────────────────

    def analyze(self, word: str, debug: AnalysisDebugData | None = None) -> list[AnalysisResult]:
        return self.analyzer.analyze(word, debug)

    def analyze_batch(
        self, words: list[str], max_workers: int | None = None,
    ) -> dict[str, list[AnalysisResult]]:
        """Analyze many words.  With max_workers > 1 the words are spread
        over a thread pool; results are identical either way."""
        unique = list(dict.fromkeys(words))
        if not max_workers or max_workers <= 1:
            return {w: self.analyzer.analyze(w) for w in unique}

        analyzer = self.analyzer
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            analyses = pool.map(analyzer.analyze, unique)
            return dict(zip(unique, analyses))

    def is_known(self, word: str) -> bool:
        return bool(self.analyzer.analyze(word))

    # ── Introspection ────────────────────────────────────────────────────

    def summary(self) -> str:
        lines = ["MorphEngine:"]
        lines.append("  [lexicon]")
        for sub_line in self.lexicon.summary().split("\n"):
            lines.append(f"    {sub_line}")
        lines.append("  [morphotactics]")
        for sub_line in self.morphotactics.summary().split("\n"):
            lines.append(f"    {sub_line}")
        if self.sources:
            lines.append("  [sources]")
            for p in self.sources:
                lines.append(f"    {p}")
        return "\n".join(lines)

    def __enter__(self) -> MorphEngine:
        return self

    def __exit__(self, *args) -> None:
        pass


# ── Path helpers ─────────────────────────────────────────────────────────

def _expand_paths(paths: tuple[str | Path, ...]) -> list[Path]:
    """Expand globs and return the list of Paths, sorted within each glob."""
    result = []
    for p in paths:
        p_str = str(p)
        if "*" in p_str or "?" in p_str:
            result.extend(Path(m) for m in sorted(glob.glob(p_str)))
        else:
            result.append(Path(p))
    return result


def _resolve_config_paths(raw_paths: list[str], base_dir: Path) -> list[Path]:
    """Resolve config paths relative to base_dir, expanding globs."""
    result = []
    for p in raw_paths:
        full = base_dir / p if not Path(p).is_absolute() else Path(p)
        full_str = str(full)
        if "*" in full_str or "?" in full_str:
            result.extend(Path(m) for m in sorted(glob.glob(full_str)))
        else:
            result.append(full)
    return result
