"""
Progress statistics for the WeekFit dashboard.
Summarises body-measurement entries into latest values, deltas and chart series.
"""
from datetime import datetime
from typing import Dict, List, Optional

from weekfit.domain.ProgressEntry import ProgressEntry, METRICS


CHART_METRICS = ("weight", "body_fat_percentage", "muscle_mass")


class ProgressStats:
    """Generate statistics and insights from a user's progress entries."""

    def __init__(self, entries: List[ProgressEntry]):
        # Oldest first, whatever order the backend returned
        self.entries = sorted(entries, key=lambda e: e.recorded_date)

    def _values(self, metric: str) -> List[float]:
        return [getattr(e, metric) for e in self.entries if getattr(e, metric) is not None]

    def latest(self) -> Dict[str, Optional[float]]:
        """Most recent non-empty value of every metric."""
        out: Dict[str, Optional[float]] = {}
        for metric in METRICS:
            values = self._values(metric)
            out[metric] = values[-1] if values else None
        return out

    def change(self) -> Dict[str, Optional[float]]:
        """Difference between the last and first recorded value of every metric."""
        out: Dict[str, Optional[float]] = {}
        for metric in METRICS:
            values = self._values(metric)
            out[metric] = round(values[-1] - values[0], 2) if len(values) >= 2 else None
        return out

    def chart_series(self) -> List[Dict]:
        """Rows for the trend chart: one per entry, dd/mm label plus the charted metrics."""
        rows = []
        for e in self.entries:
            row = {"date": e.recorded_date.strftime("%d/%m")}
            for metric in CHART_METRICS:
                row[metric] = getattr(e, metric)
            rows.append(row)
        return rows

    def generate_report(self) -> Dict:
        return {
            "count": len(self.entries),
            "latest": self.latest(),
            "change": self.change(),
            "chart": self.chart_series(),
            "first_date": self.entries[0].recorded_date.isoformat() if self.entries else None,
            "last_date": self.entries[-1].recorded_date.isoformat() if self.entries else None,
            "generated_at": datetime.now().isoformat(),
        }
