"""
Prohibited phrase rule tables.

This module handles:
- The default rule table (overused SEO terms, cliches, redundant phrases)
- Rule providers injected into the pipeline
- Loading rule tables from CSV and Excel files
- Phrase detection and phrase-quality scoring
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

import pandas as pd

from .models import PhraseRule


class PhraseRuleLoadError(Exception):
    """Raised when a phrase rule file cannot be loaded."""
    pass


def _rule(phrase: str, replacements: list[str], severity: int, category: str = "overused_seo") -> PhraseRule:
    return PhraseRule(phrase=phrase, replacements=tuple(replacements), severity=severity, category=category)


DEFAULT_PHRASE_RULES: tuple[PhraseRule, ...] = (
    # Overused SEO terms
    _rule("meticulous", ["careful", "thorough", "detailed", "precise"], 4),
    _rule("navigating", ["managing", "handling", "addressing", "dealing with"], 4),
    _rule("complexities", ["challenges", "difficulties", "intricacies", "complications"], 4),
    _rule("realm", ["field", "area", "domain", "sector"], 5),
    _rule("bespoke", ["custom", "tailored", "personalized", "specialized"], 5),
    _rule("tailored", ["customized", "personalized", "adapted", "designed"], 3),
    _rule("synergy", ["collaboration", "cooperation", "partnership", "teamwork"], 4),
    _rule("paradigm", ["model", "approach", "framework", "system"], 4),
    _rule("leverage", ["use", "utilize", "employ", "apply"], 3),
    _rule("leverages", ["uses", "utilizes", "employs", "applies"], 3),
    _rule("leveraging", ["using", "utilizing", "employing", "applying"], 3),
    _rule("holistic", ["comprehensive", "complete", "integrated", "unified"], 3),
    _rule("cutting-edge", ["advanced", "modern", "state-of-the-art", "current"], 4),
    _rule("game-changing", ["significant", "transformative", "important", "major"], 4),
    _rule("seamless", ["smooth", "effortless", "integrated", "unified"], 3),
    _rule("robust", ["strong", "reliable", "durable", "sturdy"], 3),
    _rule("scalable", ["flexible", "expandable", "adaptable", "growable"], 3),
    _rule("innovative", ["creative", "original", "new", "advanced"], 3),
    _rule("groundbreaking", ["pioneering", "revolutionary", "innovative", "novel"], 4),
    _rule("streamlined", ["simplified", "efficient", "optimized", "improved"], 3),
    _rule("next-level", ["advanced", "superior", "enhanced", "improved"], 4),
    _rule("world-class", ["excellent", "superior", "high-quality", "outstanding"], 4),
    # Cliches
    _rule("think outside the box", ["be creative", "innovate", "find new approaches"], 4, "cliche"),
    _rule("low-hanging fruit", ["easy opportunities", "quick wins", "simple solutions"], 4, "cliche"),
    _rule("move the needle", ["make progress", "create impact", "drive results"], 4, "cliche"),
    _rule("circle back", ["follow up", "revisit", "return to"], 3, "cliche"),
    _rule("touch base", ["connect", "contact", "meet"], 3, "cliche"),
    _rule("deep dive", ["thorough analysis", "detailed examination", "in-depth study"], 3, "cliche"),
    _rule("drill down", ["examine closely", "analyze in detail", "investigate"], 3, "cliche"),
    _rule("ballpark figure", ["estimate", "approximation", "rough calculation"], 3, "cliche"),
    # Redundant phrases
    _rule("advance planning", ["planning"], 3, "redundant"),
    _rule("future plans", ["plans"], 3, "redundant"),
    _rule("end result", ["result"], 3, "redundant"),
    _rule("final outcome", ["outcome"], 3, "redundant"),
    _rule("past history", ["history"], 3, "redundant"),
    _rule("close proximity", ["proximity"], 3, "redundant"),
    _rule("added bonus", ["bonus"], 3, "redundant"),
    _rule("basic fundamentals", ["fundamentals"], 3, "redundant"),
    # AI-typical phrases
    _rule("delve into", ["explore", "examine", "investigate", "study"], 4, "ai_typical"),
    _rule("dive deep", ["explore thoroughly", "examine closely", "investigate carefully"], 3, "ai_typical"),
    _rule("ultimate guide", ["complete guide", "thorough guide", "detailed guide"], 4, "ai_typical"),
)


class PhraseRuleProvider(Protocol):
    """Supplies the immutable prohibited-phrase table to the pipeline."""

    def phrase_rules(self) -> tuple[PhraseRule, ...]:
        ...


class StaticPhraseRuleProvider:
    """Provider over a fixed, in-memory rule table."""

    def __init__(self, rules: Optional[Iterable[PhraseRule]] = None):
        self._rules = DEFAULT_PHRASE_RULES if rules is None else tuple(rules)

    def phrase_rules(self) -> tuple[PhraseRule, ...]:
        return self._rules


class FilePhraseRuleProvider:
    """Provider that loads a CSV/Excel rule table once and caches it."""

    def __init__(self, file_path: Union[str, Path], sheet_name: Optional[str] = None):
        self.file_path = Path(file_path)
        self.sheet_name = sheet_name
        self._rules: Optional[tuple[PhraseRule, ...]] = None

    def phrase_rules(self) -> tuple[PhraseRule, ...]:
        if self._rules is None:
            self._rules = tuple(load_phrase_rules(self.file_path, self.sheet_name))
        return self._rules


# Common column name variations for rule files
PHRASE_COLUMN_VARIANTS = ["phrase", "term", "prohibited_phrase", "word", "keyword"]
REPLACEMENT_COLUMN_VARIANTS = ["replacements", "replacement", "alternatives", "suggestions"]
SEVERITY_COLUMN_VARIANTS = ["severity", "severity_level", "level", "priority"]
CATEGORY_COLUMN_VARIANTS = ["category", "type", "group"]

_REPLACEMENT_SEPARATOR = re.compile(r"\s*[|;]\s*")


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """Find the first column matching one of the variant names."""
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def load_phrase_rules(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[PhraseRule]:
    """
    Load phrase rules from a CSV or Excel file.

    Expected columns (flexible names): phrase, replacements (separated by
    "|" or ";"), optional severity (1-5, default 3) and optional category.

    Args:
        file_path: Path to the rule file.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        List of PhraseRule objects in file order.

    Raises:
        PhraseRuleLoadError: If the file cannot be read or is invalid.
    """
    path = Path(file_path)

    if not path.exists():
        raise PhraseRuleLoadError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            df = pd.read_csv(path, encoding="utf-8")
        elif suffix in (".xlsx", ".xls"):
            df = pd.read_excel(path, sheet_name=sheet_name) if sheet_name else pd.read_excel(path)
        else:
            raise PhraseRuleLoadError(
                f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls"
            )
    except PhraseRuleLoadError:
        raise
    except Exception as e:
        raise PhraseRuleLoadError(f"Failed to read rule file: {e}")

    return _parse_rule_dataframe(df)


def _parse_rule_dataframe(df: pd.DataFrame) -> list[PhraseRule]:
    """Parse a DataFrame into PhraseRule objects."""
    if df.empty:
        raise PhraseRuleLoadError("Rule file is empty")

    phrase_col = _find_column(df, PHRASE_COLUMN_VARIANTS)
    if phrase_col is None:
        raise PhraseRuleLoadError(
            f"No phrase column found. Expected one of: {', '.join(PHRASE_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )
    replacement_col = _find_column(df, REPLACEMENT_COLUMN_VARIANTS)
    if replacement_col is None:
        raise PhraseRuleLoadError(
            f"No replacement column found. Expected one of: {', '.join(REPLACEMENT_COLUMN_VARIANTS)}"
        )
    severity_col = _find_column(df, SEVERITY_COLUMN_VARIANTS)
    category_col = _find_column(df, CATEGORY_COLUMN_VARIANTS)

    rules: list[PhraseRule] = []
    seen: set[str] = set()

    for _, row in df.iterrows():
        phrase = row[phrase_col]
        if pd.isna(phrase) or not str(phrase).strip():
            continue
        phrase = str(phrase).strip()
        if phrase.lower() in seen:
            continue

        raw_replacements = row[replacement_col]
        if pd.isna(raw_replacements):
            replacements: tuple[str, ...] = ("",)
        else:
            replacements = tuple(
                part for part in _REPLACEMENT_SEPARATOR.split(str(raw_replacements).strip())
            ) or ("",)

        severity = 3
        if severity_col and not pd.isna(row[severity_col]):
            try:
                severity = min(5, max(1, int(float(row[severity_col]))))
            except (ValueError, TypeError):
                pass

        category = "overused_seo"
        if category_col and not pd.isna(row[category_col]):
            category = str(row[category_col]).strip().lower() or category

        seen.add(phrase.lower())
        rules.append(PhraseRule(
            phrase=phrase,
            replacements=replacements,
            severity=severity,
            category=category,
        ))

    if not rules:
        raise PhraseRuleLoadError("No valid phrase rules found in file")

    return rules


def phrase_pattern(phrase: str) -> re.Pattern:
    """Compile the case-insensitive whole-word pattern for a phrase."""
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


@dataclass
class PhraseDetection:
    """A prohibited phrase found in content, with the rule that matched it."""
    rule: PhraseRule
    positions: list[int] = field(default_factory=list)
    context: list[str] = field(default_factory=list)

    @property
    def phrase(self) -> str:
        return self.rule.phrase

    @property
    def suggestions(self) -> tuple[str, ...]:
        return self.rule.replacements

    @property
    def category(self) -> str:
        return self.rule.category

    @property
    def severity(self) -> int:
        return self.rule.severity

    @property
    def count(self) -> int:
        return len(self.positions)


@dataclass
class PhraseQualityScore:
    """Phrase-level quality summary for a piece of content."""
    overall_score: int
    detected_phrases: int
    high_severity_count: int
    category_breakdown: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)


def _extract_context(content: str, position: int, length: int, radius: int = 50) -> str:
    start = max(0, position - radius)
    end = min(len(content), position + length + radius)
    return content[start:end]


def detect_prohibited_phrases(
    content: str,
    rules: Optional[Iterable[PhraseRule]] = None,
) -> list[PhraseDetection]:
    """
    Find every prohibited phrase in content.

    Args:
        content: Text to scan.
        rules: Rule table. Defaults to DEFAULT_PHRASE_RULES.

    Returns:
        One detection per rule that matched, in rule order.
    """
    rules = DEFAULT_PHRASE_RULES if rules is None else rules
    detected = []

    for rule in rules:
        matches = list(phrase_pattern(rule.phrase).finditer(content))
        if not matches:
            continue
        detected.append(PhraseDetection(
            rule=rule,
            positions=[m.start() for m in matches],
            context=[_extract_context(content, m.start(), len(m.group(0))) for m in matches],
        ))

    return detected


# Display names for categories used in change reasons
CATEGORY_LABELS = {
    "overused_seo": "overused SEO",
    "cliche": "cliche",
    "redundant": "redundant",
    "weak": "weak",
    "filler": "filler",
    "ai_typical": "AI-typical",
}


def category_label(category: str) -> str:
    """Human-readable name of a rule category (unknown ones get underscores spaced out)."""
    return CATEGORY_LABELS.get(category, category.replace("_", " "))


# Recommendation text per category
_CATEGORY_ADVICE = {
    "overused_seo": "overused SEO terms detected. Replace with more specific, natural language.",
    "cliche": "cliches detected. Use more original, specific language.",
    "redundant": "redundant phrases found. Simplify for better readability.",
    "weak": "weak or vague terms detected. Use more precise language.",
    "filler": "filler words found. Remove these to improve content density.",
    "ai_typical": "AI-typical phrases found. Replace with more human-like expressions.",
}


def calculate_phrase_quality_score(
    content: str,
    rules: Optional[Iterable[PhraseRule]] = None,
) -> PhraseQualityScore:
    """
    Score content by the prohibited phrases it contains.

    Each detected phrase costs up to 5 points, weighted by the mean severity
    of all detections.

    Args:
        content: Text to score.
        rules: Rule table. Defaults to DEFAULT_PHRASE_RULES.

    Returns:
        PhraseQualityScore with breakdown and recommendations.
    """
    detected = detect_prohibited_phrases(content, rules)
    total_words = max(1, len(content.split()))

    category_breakdown: dict[str, int] = {}
    for detection in detected:
        category_breakdown[detection.category] = category_breakdown.get(detection.category, 0) + 1

    high_severity = sum(1 for d in detected if d.rule.is_high_severity)

    if detected:
        penalty_per_phrase = min(5.0, 100.0 / total_words)
        severity_multiplier = sum(d.severity for d in detected) / len(detected)
        overall = max(0.0, 100.0 - len(detected) * penalty_per_phrase * severity_multiplier)
    else:
        overall = 100.0

    recommendations: list[str] = []
    if not detected:
        recommendations.append("No prohibited phrases detected.")
    else:
        recommendations.append(f"Found {len(detected)} prohibited phrases that should be replaced.")
        for category, count in category_breakdown.items():
            advice = _CATEGORY_ADVICE.get(category)
            if advice:
                recommendations.append(f"{count} {advice}")
        if high_severity:
            recommendations.append(f"{high_severity} high-priority phrases need immediate attention.")

    return PhraseQualityScore(
        overall_score=round(overall),
        detected_phrases=len(detected),
        high_severity_count=high_severity,
        category_breakdown=category_breakdown,
        recommendations=recommendations,
    )


def rules_by_category(category: str, rules: Optional[Iterable[PhraseRule]] = None) -> list[PhraseRule]:
    """Get the rules of one category."""
    rules = DEFAULT_PHRASE_RULES if rules is None else rules
    return [rule for rule in rules if rule.category == category]


def phrase_table_stats(rules: Optional[Iterable[PhraseRule]] = None) -> dict:
    """Summarize a rule table by category and severity."""
    rules = list(DEFAULT_PHRASE_RULES if rules is None else rules)
    by_category: dict[str, int] = {}
    by_severity: dict[int, int] = {}

    for rule in rules:
        by_category[rule.category] = by_category.get(rule.category, 0) + 1
        by_severity[rule.severity] = by_severity.get(rule.severity, 0) + 1

    return {
        "total_phrases": len(rules),
        "by_category": by_category,
        "by_severity": by_severity,
    }
