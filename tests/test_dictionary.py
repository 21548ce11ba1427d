"""Tests for the dictionary line loader (dictionary.py)."""

import pytest

from trmorph.dictionary import (
    DictionaryFormatError,
    infer_attributes,
    load_file,
    load_files,
    load_lines,
    parse_line,
    parse_lines,
)
from trmorph.morphemes import PrimaryPos, RootAttribute as RA


# ── parse_line ────────────────────────────────────────────────────────────────

def test_bare_lemma_is_noun():
    item = parse_line("elma")
    assert item.id == "elma_Noun"
    assert item.pos is PrimaryPos.Noun
    assert item.root == "elma"
    assert item.attributes == frozenset()


def test_blank_and_comment_lines():
    assert parse_line("") is None
    assert parse_line("   ") is None
    assert parse_line("# just a comment") is None


def test_trailing_comment_is_ignored():
    assert parse_line("ev   # house").lemma == "ev"


def test_explicit_pos_and_attributes():
    item = parse_line("içeri [P:Noun; A:ImplicitDative]")
    assert item.pos is PrimaryPos.Noun
    assert RA.ImplicitDative in item.attributes


def test_attributes_without_pos():
    item = parse_line("hak [A:Doubling]")
    assert item.pos is PrimaryPos.Noun
    assert item.attributes == frozenset({RA.Doubling})


def test_short_pos_tag():
    item = parse_line("güzel [P:Adj]")
    assert item.pos is PrimaryPos.Adjective
    assert item.id == "güzel_Adj"


def test_root_override():
    item = parse_line("yemek [P:Noun; R:yemek]")
    assert item.pos is PrimaryPos.Noun
    assert item.root == "yemek"


def test_lemma_is_lowercased():
    assert parse_line("İstanbul").lemma == "istanbul"


@pytest.mark.parametrize("line", [
    "kitap [X:foo]",
    "kitap [A:Bogus]",
    "kitap [P:Bogus]",
    "kitap [P:Noun; P:Adj]",
    "kitap [Voicing]",
    "kitap [R:]",
    "iki kelime",
    "kitap [A:Voicing] extra",
])
def test_malformed_lines(line):
    with pytest.raises(DictionaryFormatError):
        parse_line(line)


def test_format_error_is_value_error():
    assert issubclass(DictionaryFormatError, ValueError)


def test_parse_lines_reports_line_number():
    with pytest.raises(DictionaryFormatError) as exc:
        parse_lines(["elma", "# ok", "kitap [A:Bogus]"], source="test.dict")
    assert exc.value.line_number == 3
    assert "test.dict:3" in str(exc.value)


# ── Verbs ─────────────────────────────────────────────────────────────────────

def test_infinitive_is_verb():
    item = parse_line("gelmek")
    assert item.pos is PrimaryPos.Verb
    assert item.lemma == "gelmek"
    assert item.root == "gel"
    assert item.id == "gelmek_Verb"


def test_explicit_noun_keeps_infinitive_ending():
    item = parse_line("yemek [P:Noun]")
    assert item.root == "yemek"


def test_irregular_aorist():
    assert RA.Aorist_I in parse_line("gelmek").attributes
    assert RA.Aorist_I in parse_line("almak").attributes


def test_single_syllable_aorist_a():
    attrs = parse_line("yazmak").attributes
    assert RA.Aorist_A in attrs
    assert RA.Aorist_I not in attrs


def test_multi_syllable_aorist_i():
    assert RA.Aorist_I in parse_line("getirmek").attributes


def test_vowel_final_verb():
    attrs = parse_line("başlamak").attributes
    assert RA.ProgressiveVowelDrop in attrs
    assert RA.Aorist_I in attrs


def test_declared_aorist_wins():
    attrs = parse_line("gitmek [A:Voicing, Aorist_A]").attributes
    assert attrs == frozenset({RA.Voicing, RA.Aorist_A})


# ── Nominal voicing inference ─────────────────────────────────────────────────

def test_voicing_inferred_for_long_roots():
    assert RA.Voicing in parse_line("kitap").attributes
    assert RA.Voicing in parse_line("ağaç").attributes


def test_voicing_not_inferred_for_short_roots():
    assert RA.Voicing not in parse_line("at").attributes
    assert RA.Voicing not in parse_line("ev").attributes


def test_voicing_inferred_after_n():
    assert RA.Voicing in parse_line("renk").attributes


def test_no_voicing_blocks_inference():
    assert RA.Voicing not in parse_line("saat [A:NoVoicing]").attributes


def test_infer_attributes_leaves_other_pos_alone():
    assert infer_attributes("çok", PrimaryPos.Adverb, frozenset()) == frozenset()


# ── Loading ───────────────────────────────────────────────────────────────────

def test_load_lines_builds_lexicon():
    lex = load_lines(["elma", "kitap", "", "# x"])
    assert len(lex) == 2
    assert "kitap_Noun" in lex


def test_load_file(tmp_path):
    p = tmp_path / "mini.dict"
    p.write_text("elma\nkitap\ngelmek\n", encoding="utf-8")
    lex = load_file(p)
    assert len(lex) == 3


def test_load_files_merges(tmp_path):
    a = tmp_path / "a.dict"
    b = tmp_path / "b.dict"
    a.write_text("elma\n", encoding="utf-8")
    b.write_text("kitap\n", encoding="utf-8")
    assert len(load_files(a, b)) == 2


def test_load_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "nope.dict")


def test_load_bundled_dictionary(sample_dict):
    lex = load_file(sample_dict)
    assert "elma_Noun" in lex
    assert "gelmek_Verb" in lex
