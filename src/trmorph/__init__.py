"""trmorph: exhaustive Turkish morphological analysis."""

from trmorph.morphemes import Morpheme, PrimaryPos, RootAttribute, MORPHEMES
from trmorph.alphabet import PhoneticAttribute, calculate_phonetic_attributes
from trmorph.surface import SuffixTemplate, materialize
from trmorph.lexicon import DictionaryItem, RootLexicon, StemTransition
from trmorph.morphotactics import Morphotactics, TurkishMorphotactics, MorphotacticsError
from trmorph.analyzer import InterpretingAnalyzer, AnalysisResult, MorphemeSurfaceForm
from trmorph.trace import AnalysisDebugData, RejectReason
from trmorph.dictionary import DictionaryFormatError, load_file, load_files, load_lines
from trmorph.engine import MorphEngine

__all__ = [
    "Morpheme", "PrimaryPos", "RootAttribute", "MORPHEMES",
    "PhoneticAttribute", "calculate_phonetic_attributes",
    "SuffixTemplate", "materialize",
    "DictionaryItem", "RootLexicon", "StemTransition",
    "Morphotactics", "TurkishMorphotactics", "MorphotacticsError",
    "InterpretingAnalyzer", "AnalysisResult", "MorphemeSurfaceForm",
    "AnalysisDebugData", "RejectReason",
    "DictionaryFormatError", "load_file", "load_files", "load_lines",
    "MorphEngine",
]
