"""Domain models for the CSV export."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportRow:
    """Rendered values of one exported measurement."""

    week: str
    date: str
    timeline: str
    weight: str
    change: str
    trend: str

    def as_list(self) -> list[str]:
        """Return the values in column order."""
        return [self.week, self.date, self.timeline, self.weight, self.change, self.trend]
