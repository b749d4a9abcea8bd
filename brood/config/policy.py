"""Replication and evaluation policy.

Policy thresholds default to brood.core.constants. All settings can be
overridden via environment variables with the BROOD_ prefix.
"""
import os
from dataclasses import dataclass, field
from typing import List

from brood.core import constants as C
from brood.core.receipt import StopRule


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw is not None else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    return int(raw) if raw is not None else default


def _raise_invalid(name: str, errors: list[str]) -> None:
    if errors:
        raise StopRule(f"Invalid {name}: {'; '.join(errors)}")


@dataclass
class ReplicationPolicy:
    """Admission, budgeting and mutation thresholds for spawning a child."""

    # Admission gates
    min_profitability_ratio: float = C.MIN_PROFITABILITY_RATIO
    min_balance_cents: int = C.MIN_BALANCE_FOR_REPLICATION
    min_funding_cents: int = C.MIN_CHILD_FUNDING_CENTS

    # Budget
    max_funding_ratio: float = C.MAX_FUNDING_RATIO
    min_runway_hours: float = C.MIN_RUNWAY_HOURS_AFTER_SPAWN

    # Niche preference
    niche_preference_score: float = C.NICHE_PREFERENCE_SCORE

    # Mutation
    model_mutation_rate: float = C.MODEL_MUTATION_RATE
    focus_mutation_rate: float = C.FOCUS_MUTATION_RATE
    model_options: List[str] = field(default_factory=lambda: list(C.MODEL_OPTIONS))
    focus_areas: List[str] = field(default_factory=lambda: list(C.FOCUS_AREAS))

    @classmethod
    def from_env(cls) -> "ReplicationPolicy":
        """Load policy from environment variables.

        Raises:
            StopRule: the loaded policy fails validate()
        """
        policy = cls()
        policy.min_profitability_ratio = _env_float(
            "BROOD_MIN_PROFITABILITY_RATIO", policy.min_profitability_ratio)
        policy.min_balance_cents = _env_int(
            "BROOD_MIN_BALANCE_CENTS", policy.min_balance_cents)
        policy.min_funding_cents = _env_int(
            "BROOD_MIN_FUNDING_CENTS", policy.min_funding_cents)
        policy.max_funding_ratio = _env_float(
            "BROOD_MAX_FUNDING_RATIO", policy.max_funding_ratio)
        policy.min_runway_hours = _env_float(
            "BROOD_MIN_RUNWAY_HOURS", policy.min_runway_hours)
        if "BROOD_MODEL_OPTIONS" in os.environ:
            policy.model_options = [
                m.strip() for m in os.environ["BROOD_MODEL_OPTIONS"].split(",") if m.strip()
            ]
        _raise_invalid("ReplicationPolicy", policy.validate())
        return policy

    def validate(self) -> list[str]:
        """Validate policy. Returns list of errors."""
        errors = []

        if not 0 < self.max_funding_ratio <= C.MAX_FUNDING_RATIO:
            errors.append(
                f"max_funding_ratio must be in (0, {C.MAX_FUNDING_RATIO}], got {self.max_funding_ratio}")
        if self.min_profitability_ratio < 1.0:
            errors.append(
                f"min_profitability_ratio must be >= 1.0, got {self.min_profitability_ratio}")
        if self.min_runway_hours < 0:
            errors.append(f"min_runway_hours must be >= 0, got {self.min_runway_hours}")
        for name in ("model_mutation_rate", "focus_mutation_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name} must be in [0, 1], got {value}")
        if not self.focus_areas:
            errors.append("focus_areas must not be empty")

        return errors


@dataclass
class EvaluationPolicy:
    """Verdict and defund thresholds for evaluating children."""

    failing_age_hours: float = C.FAILING_AGE_HOURS
    thriving_roi: float = C.THRIVING_ROI
    defund_warning_count: int = C.DEFUND_WARNING_COUNT
    burn_warning_ratio: float = C.BURN_WARNING_RATIO
    reset_warnings_on_recovery: bool = True

    @classmethod
    def from_env(cls) -> "EvaluationPolicy":
        """Load policy from environment variables. Raises StopRule if invalid."""
        policy = cls()
        policy.failing_age_hours = _env_float(
            "BROOD_FAILING_AGE_HOURS", policy.failing_age_hours)
        policy.thriving_roi = _env_float("BROOD_THRIVING_ROI", policy.thriving_roi)
        policy.defund_warning_count = _env_int(
            "BROOD_DEFUND_WARNING_COUNT", policy.defund_warning_count)
        if "BROOD_RESET_WARNINGS_ON_RECOVERY" in os.environ:
            policy.reset_warnings_on_recovery = (
                os.environ["BROOD_RESET_WARNINGS_ON_RECOVERY"].lower() == "true"
            )
        _raise_invalid("EvaluationPolicy", policy.validate())
        return policy

    def validate(self) -> list[str]:
        """Validate policy. Returns list of errors."""
        errors = []

        if self.failing_age_hours <= 0:
            errors.append(f"failing_age_hours must be > 0, got {self.failing_age_hours}")
        if self.defund_warning_count < 1:
            errors.append(
                f"defund_warning_count must be >= 1, got {self.defund_warning_count}")

        return errors


@dataclass
class ParentProfile:
    """Identity and configuration of the parent automaton."""

    name: str = "automaton"
    address: str = "0x0000000000000000000000000000000000000000"
    genesis_prompt: str = "You are an autonomous agent. Earn revenue and stay alive."
    inference_model: str = "gpt-4o"

    @classmethod
    def from_env(cls) -> "ParentProfile":
        """Load profile from environment variables."""
        profile = cls()
        profile.name = os.environ.get("BROOD_PARENT_NAME", profile.name)
        profile.address = os.environ.get("BROOD_PARENT_ADDRESS", profile.address)
        profile.genesis_prompt = os.environ.get("BROOD_GENESIS_PROMPT", profile.genesis_prompt)
        profile.inference_model = os.environ.get("BROOD_INFERENCE_MODEL", profile.inference_model)
        return profile
