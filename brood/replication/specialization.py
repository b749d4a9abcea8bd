"""Specialization analysis from the parent's top revenue source."""
import re
from dataclasses import dataclass, field

from brood.core.constants import (
    DEFAULT_SPECIALIZATION,
    SPECIALIZATION_RULES,
    SPECIALIZATION_SOURCE_LIMIT,
)
from brood.ledger.revenue import RevenueSource

_NON_SLUG = re.compile(r"[^a-zA-Z0-9-]")


@dataclass
class SpecializationAnalysis:
    """Top revenue sources and the specialization they suggest."""
    suggested_specialization: str
    top_sources: list[RevenueSource] = field(default_factory=list)


def classify_source(source: str) -> str:
    """Map a revenue source label to a specialization.

    Keyword rules are checked in order against the lower-cased source; the
    first hit wins. Unmatched sources become a slug of themselves.
    """
    lowered = source.lower()
    for keywords, label in SPECIALIZATION_RULES:
        if any(k in lowered for k in keywords):
            return label
    return slugify(source)


def slugify(text: str) -> str:
    """Replace anything outside [a-zA-Z0-9-] with '-' and lower-case."""
    return _NON_SLUG.sub("-", text).lower()


def analyze_specialization(ledger, limit: int = SPECIALIZATION_SOURCE_LIMIT) -> SpecializationAnalysis:
    """Infer a specialization from the highest-earning revenue source.

    Args:
        ledger: Anything exposing get_top_revenue_sources(limit)
        limit: How many sources to pull for the analysis

    Returns:
        SpecializationAnalysis ("general" when there is no revenue)
    """
    top_sources = ledger.get_top_revenue_sources(limit)
    if not top_sources:
        return SpecializationAnalysis(suggested_specialization=DEFAULT_SPECIALIZATION)

    return SpecializationAnalysis(
        suggested_specialization=classify_source(top_sources[0].source),
        top_sources=list(top_sources),
    )
