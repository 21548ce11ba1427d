#!/usr/bin/env python3
"""
Turkish morphological analyzer CLI.

Loads the lexicon from trmorph.toml by default, or override with flags:

    python -m trmorph.cli --analyze kitabım
    python -m trmorph.cli --analyze kitabım --config trmorph.toml
    python -m trmorph.cli --dict data/*.dict --analyze elmalar içeri
    python -m trmorph.cli --dict data/lexicon.dict --analyze kitapım --debug
    python -m trmorph.cli --summary
"""

import argparse
import sys
from pathlib import Path


def _find_default_config() -> Path | None:
    """Look for trmorph.toml in CWD."""
    candidate = Path("trmorph.toml")
    if candidate.exists():
        return candidate
    return None


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Turkish morphological analyzer"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect trmorph.toml)",
    )
    parser.add_argument(
        "--dict",
        nargs="+",
        metavar="FILE",
        help="Dictionary file(s) to load (overrides config)",
    )
    parser.add_argument(
        "--analyze",
        nargs="+",
        metavar="WORD",
        help="Analyze one or more word forms",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print lexicon and graph statistics",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stem candidates and rejected paths for each word",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="With --debug, print the trace as JSON",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: [logging] level from the config, else WARNING)",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also append log records to FILE",
    )
    args = parser.parse_args(argv)

    from trmorph.logging_config import setup_logging

    setup_logging(args.log_level or "WARNING", log_file=args.log_file)

    # ── Build engine ─────────────────────────────────────────────────────

    from trmorph.engine import MorphEngine
    from trmorph.trace import AnalysisDebugData

    if args.dict:
        engine = MorphEngine()
        engine.add_lexicon(*args.dict)
    else:
        config_path = Path(args.config) if args.config else _find_default_config()
        if config_path is None:
            parser.error(
                "No trmorph.toml found and no --dict flag given.\n"
                "  Either create a config file or pass dictionary files explicitly."
            )
        engine = MorphEngine.from_config(config_path)
        config_level = engine.config.get("logging", {}).get("level")
        if args.log_level is None and config_level:
            setup_logging(config_level, log_file=args.log_file)

    with engine:
        if args.summary or not args.analyze:
            print(engine.summary())
            print()

        # ── Analyze ──────────────────────────────────────────────────────

        if args.analyze:
            debug = AnalysisDebugData() if args.debug else None
            misses = 0
            for word in args.analyze:
                results = engine.analyze(word, debug)
                if results:
                    print(f"═══ Analysis of '{word}' ═══")
                    for r in results:
                        print(f"  {r}")
                else:
                    misses += 1
                    print(f"'{word}' has no analysis ({len(engine.lexicon)} roots loaded)")
                print()

            if debug is not None:
                if args.json:
                    print(debug.to_json())
                else:
                    for line in debug.dump():
                        print(line)

            if misses == len(args.analyze):
                sys.exit(1)


if __name__ == "__main__":
    main()
