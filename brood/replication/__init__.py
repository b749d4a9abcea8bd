"""Replication module - decide when and how to fork a funded child."""
from brood.core.sections import extract_section, parse_sections, render_sections

from .budget import ChildBudget, calculate_child_budget
from .genesis import GenesisBuilder, GenesisConfig
from .inheritance import Inheritance, SkillHistory, build_inheritance
from .mutation import (
    LinearCongruential,
    MutationSet,
    generate_mutations,
    generate_mutations_deterministic,
)
from .niches import NicheInfo, detect_niches
from .profitability import ProfitabilityCheck, check_profitability
from .spawn import RegistrySpawner, Spawner
from .specialization import SpecializationAnalysis, analyze_specialization, classify_source
from .strategy import ReplicationDecision, StrategyEngine

__all__ = [
    "StrategyEngine",
    "ReplicationDecision",
    "ProfitabilityCheck",
    "check_profitability",
    "SpecializationAnalysis",
    "analyze_specialization",
    "classify_source",
    "NicheInfo",
    "detect_niches",
    "ChildBudget",
    "calculate_child_budget",
    "Inheritance",
    "SkillHistory",
    "build_inheritance",
    "MutationSet",
    "LinearCongruential",
    "generate_mutations",
    "generate_mutations_deterministic",
    "GenesisBuilder",
    "GenesisConfig",
    "render_sections",
    "parse_sections",
    "extract_section",
    "Spawner",
    "RegistrySpawner",
]
