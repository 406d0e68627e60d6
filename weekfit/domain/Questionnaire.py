"""Questionnaire wizard: a fixed sequence of single/multiple choice steps accumulating answers."""
from typing import Any, Dict, List, Optional

from weekfit.utilities.constants import QUESTIONS, DEFAULT_SLOTS


class QuestionnaireAnswers:
    def __init__(self, goal: str = "", restrictions: Optional[List[str]] = None, budget: str = "",
                 time: str = "", experience: str = "", cuisines: Optional[List[str]] = None,
                 meals: Optional[List[str]] = None):
        self.goal = goal
        self.restrictions = restrictions[:] if restrictions else []
        self.budget = budget
        self.time = time
        self.experience = experience
        self.cuisines = cuisines[:] if cuisines else []
        self.meals = meals[:] if meals else []

    def __str__(self) -> str:
        return f"Answers(goal={self.goal}, restrictions={self.restrictions}, meals={self.meals})"

    __repr__ = __str__

    def selected_slots(self) -> List[str]:
        """Meal slots to plan; breakfast/lunch/dinner when nothing was picked."""
        return self.meals[:] if self.meals else DEFAULT_SLOTS[:]

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"goal", "restrictions", "budget", "time", "experience", "cuisines", "meals"}
        return QuestionnaireAnswers(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "goal": self.goal,
            "restrictions": self.restrictions,
            "budget": self.budget,
            "time": self.time,
            "experience": self.experience,
            "cuisines": self.cuisines,
            "meals": self.meals,
        }


class Questionnaire:
    """Linear wizard over QUESTIONS.

    Single-choice steps overwrite their answer, multiple-choice steps toggle
    values in and out. `next()` refuses to move until the current step has an
    answer; on the last step it marks the wizard finished instead.
    """

    def __init__(self, questions: Optional[List[Dict[str, Any]]] = None):
        self.questions = questions if questions is not None else QUESTIONS
        self.step = 0
        self.finished = False
        self._data: Dict[str, Any] = {
            q["id"]: ([] if q["type"] == "multiple" else "") for q in self.questions
        }

    @property
    def current(self) -> Dict[str, Any]:
        return self.questions[self.step]

    def select(self, value: str) -> None:
        q = self.current
        if value not in {opt["value"] for opt in q["options"]}:
            raise ValueError(f"Invalid option for {q['id']}: {value}")
        if q["type"] == "single":
            self._data[q["id"]] = value
            return
        values: List[str] = self._data[q["id"]]
        if value in values:
            values.remove(value)
        else:
            values.append(value)

    def is_selected(self, value: str) -> bool:
        current = self._data[self.current["id"]]
        if self.current["type"] == "single":
            return current == value
        return value in current

    def can_proceed(self) -> bool:
        current = self._data[self.current["id"]]
        if self.current["type"] == "single":
            return isinstance(current, str) and current != ""
        return isinstance(current, list) and len(current) > 0

    def next(self) -> bool:
        """Advance one step. Returns False when the current step is unanswered."""
        if not self.can_proceed():
            return False
        if self.step < len(self.questions) - 1:
            self.step += 1
        else:
            self.finished = True
        return True

    def previous(self) -> None:
        if self.step > 0:
            self.step -= 1
        self.finished = False

    def progress(self) -> float:
        return (self.step + 1) / len(self.questions) * 100

    @classmethod
    def replay(cls, data: Dict[str, Any]) -> "Questionnaire":
        """Walk every step with the given answers; ValueError if a step stays unanswered."""
        wizard = cls()
        while not wizard.finished:
            value = data.get(wizard.current["id"])
            for v in (value if isinstance(value, list) else [value] if value else []):
                if not wizard.is_selected(v):
                    wizard.select(v)
            if not wizard.next():
                raise ValueError(f"Question '{wizard.current['id']}' requires an answer")
        return wizard

    def answers(self) -> QuestionnaireAnswers:
        return QuestionnaireAnswers.from_dict(
            {k: (v[:] if isinstance(v, list) else v) for k, v in self._data.items()}
        )
