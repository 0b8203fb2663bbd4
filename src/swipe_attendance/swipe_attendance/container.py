from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .attendance.factory import StatusStrategyFactory
from .attendance.service import AttendanceProcessor, EmployeeProfile, RunConfig
from .core.constants import DEFAULT_OVERNIGHT_SHIFT_CODE
from .core.enums import EvaluationPolicy
from .shifts.repository import SettingsShiftTemplateRepository


@dataclass(frozen=True)
class Container:
    templates_repo: SettingsShiftTemplateRepository
    strategy_factory: StatusStrategyFactory
    run_config: RunConfig
    directory: Mapping[str, EmployeeProfile]

    attendance_processor: AttendanceProcessor

    def processor_for(self, policy: Optional[EvaluationPolicy | str] = None) -> AttendanceProcessor:
        """The default processor, or a fresh one when a request picks another policy."""
        if policy is None or EvaluationPolicy(policy) is self.run_config.policy:
            return self.attendance_processor
        return AttendanceProcessor(
            self.templates_repo,
            config=replace(self.run_config, policy=EvaluationPolicy(policy)),
            strategy_factory=self.strategy_factory,
            directory=self.directory,
        )


def build_container(*, settings: Any, directory: Optional[Mapping[str, EmployeeProfile]] = None) -> Container:
    templates_repo = SettingsShiftTemplateRepository(
        getattr(settings, "SHIFT_TEMPLATES"),
        overnight_code=getattr(settings, "OVERNIGHT_SHIFT_CODE", DEFAULT_OVERNIGHT_SHIFT_CODE),
    )
    strategy_factory = StatusStrategyFactory()
    run_config = RunConfig.from_settings(settings)
    directory = dict(directory or {})

    attendance_processor = AttendanceProcessor(
        templates_repo,
        config=run_config,
        strategy_factory=strategy_factory,
        directory=directory,
    )

    return Container(
        templates_repo=templates_repo,
        strategy_factory=strategy_factory,
        run_config=run_config,
        directory=directory,
        attendance_processor=attendance_processor,
    )
