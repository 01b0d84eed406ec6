"""Weight log submission and editing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from weight_planner.domain.models import WeightLog
from weight_planner.services.clock import localize

if TYPE_CHECKING:
    from weight_planner.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


class WeightLogRepository(Protocol):
    """Persistence interface for the weight log series."""

    def load(self) -> list[WeightLog]:
        """Return every stored log entry."""

    def save(self, logs: list[WeightLog]) -> None:
        """Replace the stored log series."""


class WeightLogNotFoundError(LookupError):
    """Raised when no log entry matches the requested id."""


def new_log(weight: float, logged_at: datetime) -> WeightLog:
    """Build a log entry with a fresh id."""
    return WeightLog(id=str(uuid4()), logged_at=logged_at, weight=weight)


def seed_logs(weight: float, now: datetime) -> list[WeightLog]:
    """Return the initial log series for a new profile."""
    return [new_log(weight, now)]


def submit_log(logs: list[WeightLog], entry: WeightLog) -> list[WeightLog]:
    """Return the log series with the entry applied.

    An entry with a known id replaces that entry. Otherwise an existing entry
    on the same calendar day is overwritten in place, keeping its id. Only the
    first same-day match is touched.
    """
    if any(log.id == entry.id for log in logs):
        return [entry if log.id == entry.id else log for log in logs]
    for index, log in enumerate(logs):
        if log.day == entry.day:
            updated = replace(log, logged_at=entry.logged_at, weight=entry.weight)
            return [*logs[:index], updated, *logs[index + 1 :]]
    return [*logs, entry]


def delete_log(logs: list[WeightLog], log_id: str) -> list[WeightLog]:
    """Return the log series without the given entry."""
    return [log for log in logs if log.id != log_id]


def localize_logs(logs: list[WeightLog], timezone_name: str) -> list[WeightLog]:
    """Return the series with every timestamp in the given timezone.

    Calendar days of the entries are read in that zone afterwards.
    """
    return [
        replace(log, logged_at=localize(log.logged_at, timezone_name)) for log in logs
    ]


def sort_logs(logs: list[WeightLog]) -> list[WeightLog]:
    """Return logs oldest-first."""
    return sorted(logs, key=lambda log: log.logged_at)


def latest_log(logs: list[WeightLog]) -> WeightLog | None:
    """Return the newest entry; later list positions win ties."""
    latest: WeightLog | None = None
    for log in logs:
        if latest is None or log.logged_at >= latest.logged_at:
            latest = log
    return latest


@dataclass
class WeightLogService:
    """Application service for the weight log series."""

    repository: WeightLogRepository
    profile_service: ProfileService

    def _load(self) -> list[WeightLog]:
        return localize_logs(
            self.repository.load(), self.profile_service.timezone_name
        )

    def _localize(self, logged_at: datetime) -> datetime:
        return localize(logged_at, self.profile_service.timezone_name)

    def list_logs(self) -> list[WeightLog]:
        """Return logs oldest-first."""
        return sort_logs(self._load())

    def log_weight(self, weight: float, logged_at: datetime | None = None) -> WeightLog:
        """Record a measurement, overwriting any entry on the same day."""
        moment = self._localize(logged_at) if logged_at else self.profile_service.now()
        entry = new_log(weight, moment)
        logs = submit_log(self._load(), entry)
        self._persist(logs)
        stored = next(log for log in logs if log.day == entry.day)
        _logger.info("Weight logged: id=%s day=%s", stored.id, stored.day)
        return stored

    def edit_log(self, log_id: str, weight: float, logged_at: datetime) -> WeightLog:
        """Update an existing entry, keeping its id."""
        logs = self._load()
        if not any(log.id == log_id for log in logs):
            raise WeightLogNotFoundError(log_id)
        entry = WeightLog(id=log_id, logged_at=self._localize(logged_at), weight=weight)
        self._persist(submit_log(logs, entry))
        _logger.info("Weight log edited: id=%s", log_id)
        return entry

    def delete_log(self, log_id: str) -> None:
        """Delete an entry."""
        logs = self._load()
        if not any(log.id == log_id for log in logs):
            raise WeightLogNotFoundError(log_id)
        self._persist(delete_log(logs, log_id))
        _logger.info("Weight log deleted: id=%s", log_id)

    def _persist(self, logs: list[WeightLog]) -> None:
        self.repository.save(logs)
        latest = latest_log(logs)
        if latest is not None:
            self.profile_service.sync_current_weight(latest.weight)
