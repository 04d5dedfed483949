"""Eviction policy implementations and factory."""

from __future__ import annotations

from tidytabs.eviction.base import EvictionOutcome, EvictionPolicy, apply_policy
from tidytabs.eviction.guard import CloseGuard
from tidytabs.eviction.oldest import OldestWindowPolicy
from tidytabs.eviction.stale import StaleWindowPolicy


def create_eviction_policy(policy_type: str) -> EvictionPolicy:
    """Create an eviction policy by type name.

    Args:
        policy_type: The type of policy to create
            - "stale" or "timeout": StaleWindowPolicy
            - "oldest", "cap" or "lru": OldestWindowPolicy

    Returns:
        An eviction policy instance

    Raises:
        ValueError: If the policy type is unknown
    """
    policy_type = policy_type.lower().replace("-", "_")

    if policy_type in ("stale", "timeout"):
        return StaleWindowPolicy()

    if policy_type in ("oldest", "cap", "lru"):
        return OldestWindowPolicy()

    raise ValueError(f"Unknown eviction policy type: {policy_type}")


__all__ = [
    "CloseGuard",
    "EvictionOutcome",
    "EvictionPolicy",
    "OldestWindowPolicy",
    "StaleWindowPolicy",
    "apply_policy",
    "create_eviction_policy",
]
