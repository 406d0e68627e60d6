"""Heuristic weekly menu generator.

Maps questionnaire answers to canned meal names:
  * diet from restrictions: vegan > vegetarian > regular
  * one pool of names per diet and slot family (breakfast, lunch, dinner, snack)
  * gluten/lactose/diabetic restrictions drop names containing excluded
    keywords (an emptied pool falls back to the unfiltered one)
  * the meal for day i is pool[(i + offset) % len(pool)], offset from the goal

Fully deterministic for a given answer set.
"""
from typing import Dict, List, Optional

from weekfit.domain.Questionnaire import QuestionnaireAnswers
from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.logic.shopping.list_builder import build_shopping_list
from weekfit.utilities.constants import DAYS

MEAT_KEYWORDS = ("chicken", "beef", "pork", "turkey", "fish", "salmon", "tuna", "shrimp", "bacon", "ham", "meat")

MEAL_POOLS: Dict[str, Dict[str, List[str]]] = {
    "regular": {
        "breakfast": [
            "Oatmeal with banana and honey",
            "Scrambled eggs on wholegrain toast",
            "Greek yogurt with granola and berries",
            "Banana oat pancakes",
            "Avocado toast with poached egg",
            "Spinach and cheese omelette",
            "Fruit smoothie with oats",
        ],
        "lunch": [
            "Grilled chicken with brown rice and broccoli",
            "Baked salmon with quinoa and asparagus",
            "Lean beef stir fry with vegetables",
            "Turkey wrap with salad",
            "Tuna pasta salad",
            "Chicken burrito bowl with beans",
            "Shrimp noodles with vegetables",
        ],
        "dinner": [
            "Baked fish with sweet potato",
            "Chicken soup with vegetables",
            "Turkey meatballs with zucchini noodles",
            "Grilled salmon with green salad",
            "Chicken and vegetable omelette",
            "Beef and lentil chili",
            "Tuna and cheese quesadilla",
        ],
        "snack": [
            "Apple with peanut butter",
            "Greek yogurt with honey",
            "Mixed nuts and dried fruit",
            "Hummus with carrot sticks",
            "Cottage cheese with berries",
            "Boiled eggs with cherry tomatoes",
            "Banana and almond smoothie",
        ],
    },
    "vegetarian": {
        "breakfast": [
            "Oatmeal with banana and honey",
            "Greek yogurt with granola and berries",
            "Spinach and cheese omelette",
            "Banana oat pancakes",
            "Avocado toast with poached egg",
            "Ricotta toast with strawberries",
            "Fruit smoothie with oats",
        ],
        "lunch": [
            "Caprese quinoa salad",
            "Vegetable lasagna",
            "Chickpea curry with brown rice",
            "Halloumi and vegetable wrap",
            "Lentil soup with wholegrain bread",
            "Black bean burrito bowl",
            "Spinach and feta pasta",
        ],
        "dinner": [
            "Vegetable omelette with green salad",
            "Mushroom risotto",
            "Stuffed peppers with rice and cheese",
            "Tofu stir fry with vegetables",
            "Veggie burger with sweet potato wedges",
            "Eggplant parmesan with salad",
            "Vegetable soup with lentils",
        ],
        "snack": [
            "Apple with peanut butter",
            "Greek yogurt with honey",
            "Mixed nuts and dried fruit",
            "Hummus with carrot sticks",
            "Cottage cheese with berries",
            "Boiled eggs with cherry tomatoes",
            "Banana and almond smoothie",
        ],
    },
    "vegan": {
        "breakfast": [
            "Oatmeal with banana and chia",
            "Tofu scramble with spinach",
            "Avocado toast with tomato",
            "Chia pudding with almond milk and mango",
            "Peanut butter banana smoothie",
            "Vegan banana pancakes",
            "Fruit salad with oats and seeds",
        ],
        "lunch": [
            "Lentil curry with brown rice",
            "Chickpea and quinoa salad",
            "Tofu stir fry with vegetables",
            "Black bean burrito bowl",
            "Vegetable and hummus wrap",
            "Pasta with tomato and lentil sauce",
            "Quinoa bowl with sweet potato and chickpeas",
        ],
        "dinner": [
            "Vegetable soup with beans",
            "Stuffed peppers with quinoa",
            "Tofu and broccoli noodles",
            "Lentil shepherd's pie with sweet potato",
            "Mushroom and spinach risotto",
            "Chickpea burger with salad",
            "Roasted vegetables with couscous",
        ],
        "snack": [
            "Apple with peanut butter",
            "Hummus with carrot sticks",
            "Mixed nuts and dried fruit",
            "Banana and almond smoothie",
            "Roasted chickpeas",
            "Rice cakes with avocado",
            "Fresh fruit salad",
        ],
    },
}

RESTRICTION_EXCLUSIONS: Dict[str, tuple] = {
    "gluten_free": ("toast", "bread", "pasta", "wrap", "lasagna", "noodles", "pancakes", "burger",
                    "sandwich", "quesadilla", "burrito", "couscous", "pie"),
    "lactose_free": ("yogurt", "cheese", "ricotta", "feta", "halloumi", "caprese", "parmesan"),
    "diabetic": ("honey", "pancakes", "granola", "dried fruit"),
}

GOAL_OFFSETS = {"weight_loss": 0, "muscle_gain": 1, "maintenance": 2, "healthy": 3}

# Slot -> pool family
SLOT_FAMILIES = {
    "breakfast": "breakfast",
    "lunch": "lunch",
    "dinner": "dinner",
    "morning_snack": "snack",
    "afternoon_snack": "snack",
    "supper": "snack",
}

# Shift applied to a second slot of the same family on one day (e.g. snack + supper)
_SAME_FAMILY_SHIFT = 3


def diet_type(restrictions: List[str]) -> str:
    if "vegan" in restrictions:
        return "vegan"
    if "vegetarian" in restrictions:
        return "vegetarian"
    return "regular"


def contains_meat(name: str) -> bool:
    n = name.lower()
    return any(k in n for k in MEAT_KEYWORDS)


def pool_for(slot: str, restrictions: List[str]) -> List[str]:
    """Meal names for a slot after diet selection and restriction filters."""
    family = SLOT_FAMILIES.get(slot, "snack")
    pool = MEAL_POOLS[diet_type(restrictions)][family]
    excluded = [k for r in restrictions for k in RESTRICTION_EXCLUSIONS.get(r, ())]
    if not excluded:
        return list(pool)
    filtered = [m for m in pool if not any(k in m.lower() for k in excluded)]
    return filtered or list(pool)


def _goal_offset(goal: str) -> int:
    return GOAL_OFFSETS.get(goal, 0)


def _day_meals(day_index: int, slots: List[str], answers: QuestionnaireAnswers) -> Dict[str, str]:
    offset = _goal_offset(answers.goal)
    seen_families: Dict[str, int] = {}
    meals: Dict[str, str] = {}
    for slot in slots:
        family = SLOT_FAMILIES.get(slot, "snack")
        shift = seen_families.get(family, 0) * _SAME_FAMILY_SHIFT
        seen_families[family] = seen_families.get(family, 0) + 1
        pool = pool_for(slot, answers.restrictions)
        meals[slot] = pool[(day_index + offset + shift) % len(pool)]
    return meals


def generate_weekly_menu(answers: QuestionnaireAnswers, user_id: str = "", week_start: str = "") -> WeeklyMenu:
    """Menu for all seven days over the selected slots, with its shopping list."""
    slots = answers.selected_slots()
    meals = {day: _day_meals(i, slots, answers) for i, day in enumerate(DAYS)}
    menu = WeeklyMenu(user_id=user_id, week_start=week_start, meals=meals, ai_preferences=answers.to_dict())
    menu.shopping_list = build_shopping_list(menu)
    return menu


def regenerate_meal(menu: WeeklyMenu, day: str, slot: str, answers: Optional[QuestionnaireAnswers] = None) -> bool:
    """Swap one slot for the next pool entry that differs from the current meal and the rest of the day.

    The shopping list is recomputed from scratch on success. Returns False if
    no alternative exists.
    """
    if day not in DAYS:
        raise ValueError(f"Unknown day: {day}")
    if slot not in SLOT_FAMILIES:
        raise ValueError(f"Unknown meal slot: {slot}")
    answers = answers or QuestionnaireAnswers.from_dict(menu.ai_preferences)
    pool = pool_for(slot, answers.restrictions)
    current = menu.get_meal(day, slot)
    others = {name for s, name in menu.meals.get(day, {}).items() if s != slot}

    if current in pool:
        start = pool.index(current) + 1
    else:
        start = DAYS.index(day) + _goal_offset(answers.goal) + 1
    for step in range(len(pool)):
        candidate = pool[(start + step) % len(pool)]
        if candidate != current and candidate not in others:
            menu.set_meal(day, slot, candidate)
            menu.shopping_list = build_shopping_list(menu)
            return True
    return False
