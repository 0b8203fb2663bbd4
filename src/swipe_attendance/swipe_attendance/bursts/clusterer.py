from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Sequence

from ..core.constants import DEFAULT_BURST_THRESHOLD_MINUTES
from ..swipes.model import SwipeEvent
from .model import Burst

logger = logging.getLogger(__name__)


def group_by_employee(swipes: Iterable[SwipeEvent]) -> dict[str, list[SwipeEvent]]:
    """Group swipes per employee, keeping first-appearance order of employees."""
    groups: dict[str, list[SwipeEvent]] = {}
    for swipe in swipes:
        groups.setdefault(swipe.employee_key, []).append(swipe)
    return groups


@dataclass(frozen=True)
class BurstClusterer:
    """Merge near-duplicate swipes into bursts.

    A swipe joins the open burst while its gap to the burst's last swipe is
    at most ``threshold_minutes``; equal timestamps always merge.
    """

    threshold_minutes: float = DEFAULT_BURST_THRESHOLD_MINUTES

    def cluster_employee(self, swipes: Sequence[SwipeEvent]) -> list[Burst]:
        if not swipes:
            return []

        # sorted() is stable, so equal timestamps keep input order.
        ordered = sorted(swipes, key=lambda s: s.timestamp)
        threshold = timedelta(minutes=self.threshold_minutes)

        bursts: list[Burst] = []
        current = [ordered[0]]
        for swipe in ordered[1:]:
            if swipe.timestamp - current[-1].timestamp <= threshold:
                current.append(swipe)
            else:
                bursts.append(self._close(current))
                current = [swipe]
        bursts.append(self._close(current))
        return bursts

    def cluster(self, swipes: Iterable[SwipeEvent]) -> dict[str, list[Burst]]:
        groups = group_by_employee(swipes)
        result = {key: self.cluster_employee(items) for key, items in groups.items()}
        logger.info(
            "Burst clustering: %d employees, %d bursts",
            len(result),
            sum(len(b) for b in result.values()),
        )
        return result

    @staticmethod
    def _close(swipes: list[SwipeEvent]) -> Burst:
        return Burst(
            employee_key=swipes[0].employee_key,
            start=swipes[0].timestamp,
            end=swipes[-1].timestamp,
            swipes=tuple(swipes),
        )
