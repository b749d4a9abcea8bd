"""Brood configuration: policy dataclasses and feature flags."""
from .policy import EvaluationPolicy, ParentProfile, ReplicationPolicy

__all__ = [
    "EvaluationPolicy",
    "ParentProfile",
    "ReplicationPolicy",
]
