"""Pydantic models describing a team roster configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from shiftgate.civil import get_zone
from shiftgate.core.errors import ShiftgateValueError
from shiftgate.core.types import DEFAULT_GRACE_PERIOD_MINUTES, DEFAULT_TIMEZONE
from shiftgate.scheduling import AbsenceRecord, CheckinRecord, ExemptionInterval, WorkPattern

__all__ = ["RosterConfig"]


class RosterConfig(BaseModel):
    """Organization/team configuration consumed by the eligibility engine.

    Attributes
    ----------
    name:
        Label for the roster (team or organization name).
    timezone:
        IANA zone identifier shared by the whole organization. Validated once
        here so evaluations never re-check it.
    pattern:
        Work days and shift hours for the team.
    grace_minutes:
        Minutes before shift start at which check-in opens (default 30).
    exemptions:
        Snapshot of leave intervals from the approvals workflow.
    absences:
        Recorded absences, used by the week calendar.
    checkins:
        Recorded check-ins, used by the week calendar and to tell whether a
        worker has already checked in today.
    """

    name: str = "roster"
    timezone: str = DEFAULT_TIMEZONE
    pattern: WorkPattern = Field(default_factory=WorkPattern)
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    exemptions: list[ExemptionInterval] = Field(default_factory=list)
    absences: list[AbsenceRecord] = Field(default_factory=list)
    checkins: list[CheckinRecord] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            get_zone(value)
        except ShiftgateValueError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("grace_minutes")
    @classmethod
    def _grace_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("grace_minutes must be non-negative")
        return value

    def worker_ids(self) -> list[str]:
        seen = {exemption.worker_id for exemption in self.exemptions}
        seen.update(record.worker_id for record in self.absences)
        seen.update(record.worker_id for record in self.checkins)
        return sorted(seen)

    # Leave, absences and check-ins are per worker; without a worker none apply.
    def exemptions_for(self, worker_id: str | None) -> list[ExemptionInterval]:
        if worker_id is None:
            return []
        return [exemption for exemption in self.exemptions if exemption.worker_id == worker_id]

    def absences_for(self, worker_id: str | None) -> list[AbsenceRecord]:
        if worker_id is None:
            return []
        return [record for record in self.absences if record.worker_id == worker_id]

    def checkins_for(self, worker_id: str | None) -> list[CheckinRecord]:
        if worker_id is None:
            return []
        return [record for record in self.checkins if record.worker_id == worker_id]
