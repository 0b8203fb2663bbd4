from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import EvaluationPolicy
from ..core.exceptions import ValidationError
from .strategies.base import StatusStrategy
from .strategies.strict_strategy import StrictStatusStrategy
from .strategies.tolerant_strategy import TolerantStatusStrategy


@dataclass
class StatusStrategyFactory:
    """Factory Pattern: one status strategy per run, picked from the policy."""

    def for_policy(self, policy: EvaluationPolicy | str) -> StatusStrategy:
        try:
            policy = EvaluationPolicy(policy)
        except ValueError as exc:
            raise ValidationError(f"unknown evaluation policy: {policy!r}") from exc

        if policy is EvaluationPolicy.TOLERANT:
            return TolerantStatusStrategy()
        return StrictStatusStrategy()
