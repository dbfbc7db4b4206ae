# Text cleaner core: character normalization and a heuristic AI-likelihood score.
#
# Both entry points are pure functions of their arguments. Every pattern table is
# compiled once at import and shared across calls; nothing here holds mutable state.

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Mapping

from data_designer_text_cleaner.rules import DEFAULT_RULES, validate_rules

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Point weights, ceilings, and thresholds used by the scorer."""

    special_char_ceiling: float = 20.0
    rule_char_points: float = 2.0
    ai_symbol_points: float = 1.5

    language_ceiling: float = 30.0
    formal_phrase_points: float = 3.0
    academic_word_points: float = 2.0

    structural_ceiling: float = 25.0
    min_sentence_chars: int = 10
    structural_min_sentences: int = 3
    sentence_variance_threshold: float = 25.0
    consistent_sentence_points: float = 8.0
    min_paragraph_chars: int = 50
    structural_min_paragraphs: int = 2
    paragraph_mean_min_chars: float = 200.0
    paragraph_mean_max_chars: float = 500.0
    uniform_paragraph_points: float = 6.0
    bullet_points: float = 5.0
    numbered_list_points: float = 4.0

    vocabulary_ceiling: float = 15.0
    sophisticated_word_points: float = 2.0
    technical_term_points: float = 1.5

    repetition_ceiling: float = 10.0
    counted_token_min_length: int = 4
    repeated_word_min_length: int = 5
    repeated_word_min_count: int = 4
    repeated_word_points: float = 1.0
    repeated_opener_min_count: int = 3
    repeated_opener_points: float = 1.5


DEFAULT_HYPERPARAMETERS = Hyperparameters()

# The score never claims certainty, whatever the weights.
PERCENTAGE_CEILING = 95


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DetectorResult:
    """One detector's points, clamped to [0, max_score], with the matches behind them."""

    score: float
    evidence: tuple[str, ...]
    max_score: float

    def to_payload(self) -> dict[str, object]:
        return {
            "score": self.score,
            "evidence": list(self.evidence),
            "max_score": self.max_score,
        }


@dataclass(frozen=True)
class AIScoreResult:
    """Outcome of one :func:`score` call.

    ``breakdown`` maps detector name to its capped result and is empty when the
    input had no non-whitespace text.
    """

    percentage: int
    raw_score: int
    breakdown: Mapping[str, DetectorResult]

    def to_payload(self) -> dict[str, object]:
        return {
            "percentage": self.percentage,
            "raw_score": self.raw_score,
            "breakdown": {name: result.to_payload() for name, result in self.breakdown.items()},
        }


@dataclass(frozen=True)
class _ScoringContext:
    text: str
    rules: Mapping[str, str]
    hp: Hyperparameters


_Term = tuple[str, re.Pattern]
_Detector = Callable[[_ScoringContext], DetectorResult]

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------


def _compile_terms(terms: list[str]) -> tuple[_Term, ...]:
    # dict.fromkeys drops repeats but keeps first-seen order
    return tuple(
        (term, re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE))
        for term in dict.fromkeys(terms)
    )


_AI_SYMBOLS = frozenset(
    "•◦▪‣"                   # bullets
    "→←↑↓↔⇒⇐⇔"               # arrows
    "∞√∑∏∫∂∆∇±×÷°"           # math
    "€£¥¢"                   # currency
    "αβγδεθλμπσφωΩ"          # Greek
    "≤≥≠≈≡"                  # comparison
    "⊂⊃⊆⊇∪∩∈∉∀∃∅"            # set theory and logic
)

_FORMAL_PHRASES = [
    "in conclusion", "furthermore", "moreover", "additionally",
    "it is important to note", "it should be noted", "it is worth noting",
    "in summary", "to summarize", "consequently", "therefore", "thus", "hence",
    "nevertheless", "nonetheless", "however", "on the other hand", "in contrast",
    "conversely", "similarly", "likewise", "in addition", "as a result",
    "for instance", "for example", "specifically", "notably", "ultimately",
]
_ACADEMIC_WORDS = [
    "methodology", "framework", "paradigm", "comprehensive", "systematic",
    "rigorous", "empirical", "theoretical", "analytical", "substantial",
    "significant", "fundamental", "implementation", "optimization", "facilitate",
    "utilize", "leverage", "enhance", "demonstrate", "evaluate",
]
_SOPHISTICATED_WORDS = [
    "ubiquitous", "paramount", "multifaceted", "intricate", "nuanced",
    "meticulous", "pivotal", "quintessential", "elucidate", "delve",
    "plethora", "myriad", "juxtaposition", "synergy", "holistic",
    "robust", "seamless", "transformative", "unprecedented", "tapestry",
]
_TECHNICAL_TERMS = [
    "api", "framework", "algorithm", "machine learning", "artificial intelligence",
    "blockchain", "cloud computing", "database", "neural network", "deep learning",
    "scalability", "infrastructure", "optimization", "integration", "deployment",
    "analytics", "cybersecurity", "automation", "big data",
]

_FORMAL_PHRASE_RES = _compile_terms(_FORMAL_PHRASES)
_ACADEMIC_WORD_RES = _compile_terms(_ACADEMIC_WORDS)
_SOPHISTICATED_WORD_RES = _compile_terms(_SOPHISTICATED_WORDS)
_TECHNICAL_TERM_RES = _compile_terms(_TECHNICAL_TERMS)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_BULLET_LINE_RE = re.compile(r"^[ \t]*[-*•]\s", re.MULTILINE)
_NUMBERED_LINE_RE = re.compile(r"^\d+\.\s", re.MULTILINE)
_TOKEN_RE = re.compile(r"[^\W_]+")
_SENTENCE_OPENER_RE = re.compile(r"(?:^|[.!?]\s+)([A-Z][a-z]*)", re.MULTILINE)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _capped(points: float, ceiling: float, evidence: list[str]) -> DetectorResult:
    return DetectorResult(score=max(0.0, min(points, ceiling)), evidence=tuple(evidence), max_score=ceiling)


def _present_terms(text: str, terms: tuple[_Term, ...]) -> list[str]:
    return [term for term, pattern in terms if pattern.search(text)]


def _sentences(text: str, min_chars: int) -> list[str]:
    fragments = (s.strip() for s in _SENTENCE_SPLIT_RE.split(text))
    return [s for s in fragments if len(s) >= min_chars]


def _paragraphs(text: str, min_chars: int) -> list[str]:
    blocks = (p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text))
    return [p for p in blocks if len(p) >= min_chars]


def _population_variance(values: list[int]) -> float:
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------


def _detect_special_characters(ctx: _ScoringContext, symbols: frozenset[str] = _AI_SYMBOLS) -> DetectorResult:
    hp = ctx.hp
    points = 0.0
    seen: Counter[str] = Counter()
    for ch in ctx.text:
        hit = False
        if ch in ctx.rules:
            points += hp.rule_char_points
            hit = True
        if ch in symbols:
            points += hp.ai_symbol_points
            hit = True
        if hit:
            seen[ch] += 1
    evidence = [f"{ch}({count}x)" for ch, count in seen.items()]
    return _capped(points, hp.special_char_ceiling, evidence)


def _detect_language_patterns(
    ctx: _ScoringContext,
    phrases: tuple[_Term, ...] = _FORMAL_PHRASE_RES,
    words: tuple[_Term, ...] = _ACADEMIC_WORD_RES,
) -> DetectorResult:
    hp = ctx.hp
    matched_phrases = _present_terms(ctx.text, phrases)
    matched_words = _present_terms(ctx.text, words)
    points = len(matched_phrases) * hp.formal_phrase_points + len(matched_words) * hp.academic_word_points
    return _capped(points, hp.language_ceiling, matched_phrases + matched_words)


def _detect_structural_patterns(ctx: _ScoringContext) -> DetectorResult:
    hp = ctx.hp
    points = 0.0
    evidence: list[str] = []

    sentences = _sentences(ctx.text, hp.min_sentence_chars)
    if len(sentences) >= hp.structural_min_sentences:
        variance = _population_variance([len(s.split()) for s in sentences])
        if variance < hp.sentence_variance_threshold:
            points += hp.consistent_sentence_points
            evidence.append("consistent sentence length")

    paragraphs = _paragraphs(ctx.text, hp.min_paragraph_chars)
    if len(paragraphs) >= hp.structural_min_paragraphs:
        mean_length = sum(len(p) for p in paragraphs) / len(paragraphs)
        if hp.paragraph_mean_min_chars < mean_length < hp.paragraph_mean_max_chars:
            points += hp.uniform_paragraph_points
            evidence.append("uniform paragraph length")

    if _BULLET_LINE_RE.search(ctx.text):
        points += hp.bullet_points
        evidence.append("bullet points")
    if _NUMBERED_LINE_RE.search(ctx.text):
        points += hp.numbered_list_points
        evidence.append("numbered list")

    return _capped(points, hp.structural_ceiling, evidence)


def _detect_vocabulary(
    ctx: _ScoringContext,
    sophisticated: tuple[_Term, ...] = _SOPHISTICATED_WORD_RES,
    technical: tuple[_Term, ...] = _TECHNICAL_TERM_RES,
) -> DetectorResult:
    hp = ctx.hp
    matched_sophisticated = _present_terms(ctx.text, sophisticated)
    matched_technical = _present_terms(ctx.text, technical)
    points = (
        len(matched_sophisticated) * hp.sophisticated_word_points
        + len(matched_technical) * hp.technical_term_points
    )
    return _capped(points, hp.vocabulary_ceiling, matched_sophisticated + matched_technical)


def _detect_repetition(ctx: _ScoringContext) -> DetectorResult:
    hp = ctx.hp
    points = 0.0
    evidence: list[str] = []

    tokens = _TOKEN_RE.findall(ctx.text.lower())
    frequencies = Counter(t for t in tokens if len(t) >= hp.counted_token_min_length)
    for word, count in frequencies.items():
        if len(word) >= hp.repeated_word_min_length and count >= hp.repeated_word_min_count:
            points += hp.repeated_word_points
            evidence.append(f"{word}({count}x)")

    openers = Counter(m.group(1).lower() for m in _SENTENCE_OPENER_RE.finditer(ctx.text))
    for word, count in openers.items():
        if count >= hp.repeated_opener_min_count:
            points += hp.repeated_opener_points
            evidence.append(f"starts_with_{word}({count}x)")

    return _capped(points, hp.repetition_ceiling, evidence)


# ---------------------------------------------------------------------------
# Pipeline wiring
# ---------------------------------------------------------------------------

_PIPELINE: list[tuple[str, _Detector]] = [
    ("special_characters", _detect_special_characters),
    ("language_patterns", _detect_language_patterns),
    ("structural_patterns", _detect_structural_patterns),
    ("vocabulary", _detect_vocabulary),
    ("repetition", _detect_repetition),
]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize(text: str, rules: Mapping[str, str] | None = None) -> str:
    """Rewrite special characters to plain-ASCII equivalents.

    Rules run in mapping order and each one sees the output of the previous
    one, so a replacement containing another rule's source is rewritten again
    by that later rule.

    Args:
        text: The text to clean.
        rules: Source-to-replacement mapping. Uses :data:`DEFAULT_RULES` if omitted.

    Raises:
        InvalidRuleError: If ``rules`` is not a mapping of non-empty strings to
            strings. Raised before any replacement is applied.
    """
    rules = validate_rules(DEFAULT_RULES if rules is None else rules)
    if not text:
        return ""
    for source, target in rules.items():
        text = text.replace(source, target)
    return text


def score(
    text: str,
    rules: Mapping[str, str] | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> AIScoreResult:
    """Estimate how likely ``text`` is to be machine-generated.

    Five detectors each award capped points; their sum (at most 100) is scaled
    to a percentage that never exceeds 95. The score is a rough indicator, not
    a classifier.

    Args:
        text: The prose to score.
        rules: Rule set whose source characters count as special characters.
            Uses :data:`DEFAULT_RULES` if omitted.
        hyperparameters: Optional weight overrides.

    Returns:
        AIScoreResult with ``percentage`` in [0, 95], the rounded raw point
        total, and the per-detector breakdown.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if not text or not text.strip():
        return AIScoreResult(percentage=0, raw_score=0, breakdown={})

    ctx = _ScoringContext(text=text, rules=DEFAULT_RULES if rules is None else rules, hp=hp)
    breakdown = {name: detector(ctx) for name, detector in _PIPELINE}
    total = sum(result.score for result in breakdown.values())
    percentage = max(0, min(_round_half_up(total / 100 * PERCENTAGE_CEILING), PERCENTAGE_CEILING))

    return AIScoreResult(percentage=percentage, raw_score=_round_half_up(total), breakdown=breakdown)
