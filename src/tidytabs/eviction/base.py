"""Base eviction policy protocol and the shared candidate walk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from tidytabs.config.settings import TabSettings
from tidytabs.core.window import ActivityRecord, WindowHandle, WindowSnapshot

if TYPE_CHECKING:
    from tidytabs.eviction.guard import CloseGuard

logger = logging.getLogger(__name__)


@dataclass
class EvictionOutcome:
    """Result of running one policy against one snapshot.

    Attributes:
        policy: Name of the policy that ran
        target: How many windows the policy wanted to close
        closed: Windows that were actually closed, in closing order
        attempted: How many candidates were offered to the guard
    """

    policy: str
    target: int = 0
    closed: list[WindowHandle] = field(default_factory=list)
    attempted: int = 0

    @property
    def closed_count(self) -> int:
        return len(self.closed)

    @property
    def satisfied(self) -> bool:
        """Check if the policy closed everything it wanted to."""
        return self.closed_count >= self.target

    def to_dict(self) -> dict[str, Any]:
        return {
            "policy": self.policy,
            "target": self.target,
            "closed": [str(w) for w in self.closed],
            "attempted": self.attempted,
        }


class EvictionPolicy(Protocol):
    """Protocol defining the interface for eviction policies.

    A policy is pure decision logic: it says how many windows should close
    and in which order to try them. Closing is left to the CloseGuard.
    """

    @property
    def name(self) -> str:
        """Get the name of this policy."""
        ...

    def close_target(self, snapshot: WindowSnapshot, settings: TabSettings) -> int:
        """Number of windows this policy wants closed.

        Args:
            snapshot: Currently open windows
            settings: Settings read for this pass

        Returns:
            A non-negative count; zero means the policy has nothing to do
        """
        ...

    def select_candidates(
        self,
        snapshot: WindowSnapshot,
        records: list[ActivityRecord],
        settings: TabSettings,
        now: float,
    ) -> list[WindowHandle]:
        """Order the windows this policy may close.

        Args:
            snapshot: Currently open windows
            records: Activity records sorted oldest first
            settings: Settings read for this pass
            now: Current Unix time

        Returns:
            Candidate windows, most preferred first
        """
        ...


async def apply_policy(
    policy: EvictionPolicy,
    snapshot: WindowSnapshot,
    records: list[ActivityRecord],
    settings: TabSettings,
    guard: CloseGuard,
    now: float,
) -> EvictionOutcome:
    """Walk a policy's candidates, closing until its target is met.

    Candidates the guard refuses or fails to close do not count towards the
    target; the walk moves on to the next one.

    Args:
        policy: The policy deciding what to close
        snapshot: Currently open windows
        records: Activity records sorted oldest first
        settings: Settings read for this pass
        guard: Guard that validates and performs each close
        now: Current Unix time

    Returns:
        The outcome of the walk
    """
    outcome = EvictionOutcome(policy=policy.name)
    outcome.target = policy.close_target(snapshot, settings)
    if outcome.target <= 0:
        return outcome

    candidates = policy.select_candidates(snapshot, records, settings, now)
    logger.debug(
        f"Policy {policy.name}: {len(candidates)} candidates for {outcome.target} closes"
    )

    for window in candidates:
        if outcome.closed_count >= outcome.target:
            break

        outcome.attempted += 1
        if await guard.close(window, snapshot):
            outcome.closed.append(window)

    return outcome
