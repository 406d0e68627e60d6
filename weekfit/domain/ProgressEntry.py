"""ProgressEntry domain entity: one dated set of optional body measurements."""
from datetime import date, datetime
from typing import Optional

METRICS = ("weight", "body_fat_percentage", "muscle_mass", "waist_circumference")


def _as_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


class ProgressEntry:
    def __init__(self, recorded_date: Optional[date] = None, weight: Optional[float] = None,
                 body_fat_percentage: Optional[float] = None, muscle_mass: Optional[float] = None,
                 waist_circumference: Optional[float] = None, notes: Optional[str] = None,
                 id: Optional[str] = None, user_id: str = ""):
        self.id = id
        self.user_id = user_id
        self.recorded_date = recorded_date or date.today()
        self.weight = _as_float(weight)
        self.body_fat_percentage = _as_float(body_fat_percentage)
        self.muscle_mass = _as_float(muscle_mass)
        self.waist_circumference = _as_float(waist_circumference)
        self.notes = notes

    def __str__(self) -> str:
        return f"{self.recorded_date.isoformat()} weight={self.weight}"

    __repr__ = __str__

    def has_measurements(self) -> bool:
        return any(getattr(self, m) is not None for m in METRICS)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_date = d.get("recorded_date")
        if isinstance(raw_date, str) and raw_date:
            try:
                raw_date = datetime.strptime(raw_date[:10], "%Y-%m-%d").date()
            except ValueError:
                raw_date = None
        elif not isinstance(raw_date, date):
            raw_date = None
        return ProgressEntry(
            recorded_date=raw_date,
            weight=d.get("weight"),
            body_fat_percentage=d.get("body_fat_percentage"),
            muscle_mass=d.get("muscle_mass"),
            waist_circumference=d.get("waist_circumference"),
            notes=d.get("notes"),
            id=d.get("id"),
            user_id=d.get("user_id", ""),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "recorded_date": self.recorded_date.isoformat(),
            "weight": self.weight,
            "body_fat_percentage": self.body_fat_percentage,
            "muscle_mass": self.muscle_mass,
            "waist_circumference": self.waist_circumference,
            "notes": self.notes,
        }
