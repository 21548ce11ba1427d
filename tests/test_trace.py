"""Tests for the analysis debug trace (trace.py)."""

import json

from trmorph.trace import AnalysisDebugData, RejectReason


def _trace(analyzer, *words) -> AnalysisDebugData:
    debug = AnalysisDebugData()
    for w in words:
        analyzer.analyze(w, debug)
    return debug


# ── Recording ─────────────────────────────────────────────────────────────────

def test_records_candidates(analyzer):
    debug = _trace(analyzer, "elmalar")
    assert debug.words == ["elmalar"]
    assert debug.candidates["elmalar"] == ["elma(elma_Noun)+'lar'", "el(el_Noun)+'malar'"]


def test_records_accepted_results(analyzer):
    debug = _trace(analyzer, "kitabım")
    assert debug.results["kitabım"] == ["kitab:Noun+A3sg+P1sg:ım+Nom"]


def test_unvoiced_root_before_vowel_is_explained(analyzer):
    debug = _trace(analyzer, "kitapım")
    assert debug.results["kitapım"] == []
    assert RejectReason.EXPECTS_CONSONANT in debug.reasons()


def test_voiced_root_before_consonant_is_explained(analyzer):
    debug = _trace(analyzer, "kitablar")
    assert RejectReason.EXPECTS_VOWEL in debug.reasons()


def test_voiced_root_at_word_end_is_explained(analyzer):
    debug = _trace(analyzer, "kitab")
    reasons = [r for r in debug.rejections if r.reason is RejectReason.CANNOT_TERMINATE]
    assert reasons
    assert reasons[0].state == "nom_ST"


def test_condition_failures_are_recorded(analyzer):
    debug = _trace(analyzer, "kitaplarcık")
    failed = [r for r in debug.rejections if r.reason is RejectReason.CONDITION_FAILED]
    assert any("Dim" in r.transition or "dim_S" in r.transition for r in failed)


def test_dead_ends_are_recorded(analyzer):
    debug = _trace(analyzer, "kitaptacık")
    assert RejectReason.NO_TRANSITION in debug.reasons()


def test_rejections_carry_context(analyzer):
    debug = _trace(analyzer, "kitapım")
    r = debug.rejections_for("kitapım")[0]
    assert r.word == "kitapım"
    assert r.path.startswith("kitap:Noun")
    assert r.state


def test_separate_words_are_kept_apart(analyzer):
    debug = _trace(analyzer, "elma", "kitapım")
    assert debug.words == ["elma", "kitapım"]
    assert all(r.word == "kitapım" for r in debug.rejections_for("kitapım"))
    assert debug.results["elma"] == ["elma:Noun+A3sg+Pnon+Nom"]


def test_by_path_groups_reasons(analyzer):
    debug = _trace(analyzer, "kitapım")
    grouped = debug.by_path()
    assert grouped
    assert all(isinstance(r, RejectReason) for reasons in grouped.values() for r in reasons)


# ── Output ────────────────────────────────────────────────────────────────────

def test_dump(analyzer):
    lines = _trace(analyzer, "kitapım").dump()
    assert lines[0] == "═══ kitapım ═══"
    assert "Rejected:" in lines
    assert any("expects consonant" in line for line in lines)


def test_to_json(analyzer):
    data = json.loads(_trace(analyzer, "kitabım").to_json())
    assert data["words"] == ["kitabım"]
    assert data["results"]["kitabım"] == ["kitab:Noun+A3sg+P1sg:ım+Nom"]
    assert all(isinstance(r["reason"], str) for r in data["rejections"])


def test_empty_trace():
    debug = AnalysisDebugData()
    assert debug.dump() == []
    assert not debug.reasons()
