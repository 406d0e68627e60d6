from typing import Iterable, List

from weekfit.domain.Achievement import Achievement


def achievements_to_unlock(catalog: Iterable[Achievement], unlocked_ids: Iterable[str],
                           streak: int, meals_logged: int) -> List[Achievement]:
    """Locked achievements whose requirement is met by the given counters."""
    unlocked = set(unlocked_ids)
    return [a for a in catalog if a.id not in unlocked and a.is_met(streak, meals_logged)]
