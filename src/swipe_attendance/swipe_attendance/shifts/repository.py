from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.datetime_utils import parse_clock
from ..core.exceptions import TemplateConfigError
from .model import ShiftTemplate

# settings key -> ShiftTemplate field
_TIME_FIELDS = {
    "check_in_start": "check_in_start",
    "check_in_end": "check_in_end",
    "shift_start": "shift_start",
    "check_in_on_time_cutoff": "on_time_cutoff",
    "check_in_late_threshold": "late_threshold",
    "check_out_start": "check_out_start",
    "check_out_end": "check_out_end",
    "check_out_expected_time": "expected_check_out_time",
    "break_search_start": "break_search_start",
    "break_search_end": "break_search_end",
    "break_out_checkpoint": "break_checkpoint",
    "break_out_expected_time": "expected_break_out_time",
    "midpoint": "midpoint",
    "break_end_time": "break_end_time",
    "break_in_on_time_cutoff": "break_on_time_cutoff",
    "break_in_late_threshold": "break_late_threshold",
}


class ShiftTemplateRepository(Protocol):
    def list_all(self) -> Sequence[ShiftTemplate]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    @property
    def overnight_code(self) -> str:
        raise NotImplementedError


def build_template(code: str, raw: Mapping[str, Any]) -> ShiftTemplate:
    """Convert one settings entry (HH:MM:SS strings) into a ``ShiftTemplate``."""
    values: dict[str, Any] = {}
    for key, field in _TIME_FIELDS.items():
        if key not in raw:
            raise TemplateConfigError(f"shift {code}: missing '{key}'")
        try:
            values[field] = parse_clock(raw[key])
        except ValueError as exc:
            raise TemplateConfigError(f"shift {code}: {exc}") from exc

    try:
        gap = int(raw.get("minimum_break_gap_minutes", 5))
    except (TypeError, ValueError) as exc:
        raise TemplateConfigError(f"shift {code}: minimum_break_gap_minutes must be an integer") from exc
    if gap < 0:
        raise TemplateConfigError(f"shift {code}: minimum_break_gap_minutes must not be negative")

    return ShiftTemplate(
        code=code,
        display_name=str(raw.get("display_name") or code),
        minimum_break_gap_minutes=gap,
        **values,
    )


class SettingsShiftTemplateRepository(ShiftTemplateRepository):
    """Templates loaded once from the ``SHIFT_TEMPLATES`` settings dict.

    Iteration order follows the settings order, which also decides which
    code wins when check-in windows overlap.
    """

    def __init__(self, raw_templates: Mapping[str, Mapping[str, Any]], *, overnight_code: str):
        if not raw_templates:
            raise TemplateConfigError("at least one shift template is required")
        self._templates = {code: build_template(code, raw) for code, raw in raw_templates.items()}
        if overnight_code not in self._templates:
            raise TemplateConfigError(f"overnight shift code '{overnight_code}' is not configured")
        self._overnight_code = overnight_code

    def list_all(self) -> Sequence[ShiftTemplate]:
        return list(self._templates.values())

    def get_by_code(self, code: str) -> Optional[ShiftTemplate]:
        return self._templates.get(code)

    @property
    def overnight_code(self) -> str:
        return self._overnight_code
