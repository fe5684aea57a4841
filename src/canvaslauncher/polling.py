"""Bounded polling for host conditions that settle asynchronously."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class PollPolicy:
    timeout_seconds: float = 1.5
    interval_seconds: float = 0.05

    @property
    def max_checks(self) -> int:
        if self.interval_seconds <= 0:
            return 1
        # Tolerance absorbs float error in the ratio.
        return int(self.timeout_seconds / self.interval_seconds + 1e-9) + 1


def poll_until(
    check: Callable[[], bool],
    *,
    policy: PollPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Call ``check`` until it returns True or the policy's budget is spent.

    The first check runs immediately; at most ``policy.max_checks`` checks run,
    separated by ``interval_seconds``. Returns whether the condition was met.
    """
    attempts = policy.max_checks
    for attempt in range(1, attempts + 1):
        if check():
            return True
        if attempt < attempts:
            sleep(policy.interval_seconds)
    return False
