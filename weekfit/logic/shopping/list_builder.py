"""Shopping list builder.

Aggregates the ingredients of every meal of a weekly menu into the fixed
categories (proteins, carbs, vegetables, fruits, dairy, others), counting
repeats per normalized name, and cleans AI-provided categorized lists.
"""
import re
from collections import OrderedDict
from typing import Any, Dict, List

from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.logic.recipes.builder import recipe_for_meal
from weekfit.utilities.constants import SHOPPING_CATEGORIES


def _normalize(name: str) -> str:
    return re.sub(r"\s+", " ", (name or '').strip().lower())


def _stem(word: str) -> str:
    # Simple plural to singular heuristics (not perfect, acceptable for this use case)
    if word.endswith('ies') and len(word) > 3:
        return word[:-3] + 'y'  # berries -> berry
    if word.endswith('oes') and len(word) > 3:
        return word[:-3] + 'o'  # tomatoes -> tomato, potatoes -> potato
    if word.endswith('ses') and len(word) > 3:
        return word[:-2]
    if word.endswith('es') and len(word) > 2 and word[-3] not in 'aeiou':
        return word[:-2]  # dishes -> dish
    if word.endswith('s') and not word.endswith('ss') and len(word) > 1:
        return word[:-1]
    return word


def _key(name: str) -> str:
    """Dedup key: lower case, collapsed whitespace, every word singularized."""
    return " ".join(_stem(w) for w in _normalize(name).split(" ") if w)


# Multi-word items that would otherwise be caught by a later category
_OTHER_PHRASES = ("peanut butter", "soy sauce", "olive oil", "vegetable stock")

_CATEGORY_KEYWORDS = OrderedDict([
    ("others", ("stock", "oil", "salt", "spice", "powder", "honey", "hummus", "curry", "sauce",
                "paste", "seeds", "vinegar")),
    ("dairy", ("yogurt", "cheese", "milk", "ricotta", "feta", "halloumi", "mozzarella", "parmesan",
               "butter", "cream")),
    ("proteins", ("chicken", "beef", "turkey", "salmon", "tuna", "fish", "shrimp", "eggs", "tofu",
                  "lentils", "chickpeas", "beans", "patties", "nuts", "almonds", "pork", "ham")),
    ("carbs", ("oats", "rice", "quinoa", "bread", "pasta", "tortillas", "noodles", "flour", "potatoes",
               "couscous", "granola", "buns", "cakes")),
    ("vegetables", ("spinach", "broccoli", "asparagus", "carrots", "zucchini", "peppers", "lettuce",
                    "tomatoes", "cucumber", "onions", "garlic", "mushrooms", "eggplant", "kale", "basil",
                    "vegetables")),
    ("fruits", ("banana", "berries", "strawberries", "apples", "avocado", "mango", "fruit", "lemon")),
])
_STEMMED_KEYWORDS = {cat: {_stem(k) for k in words} for cat, words in _CATEGORY_KEYWORDS.items()}


def categorize_ingredient(name: str) -> str:
    """Bucket an ingredient by keyword; anything unrecognised lands in 'others'."""
    text = _normalize(name)
    if any(p in text for p in _OTHER_PHRASES):
        return "others"
    tokens = set(_key(text).split(" "))
    for category, words in _STEMMED_KEYWORDS.items():
        if tokens & words:
            return category
    return "others"


def _render(display: str, count: int) -> str:
    return display if count <= 1 else f"{display} (x{count})"


def aggregate_ingredients(ingredient_lists: List[List[str]]) -> Dict[str, List[str]]:
    """Count ingredients across recipes and render them per category."""
    counts: Dict[str, int] = {}
    display: Dict[str, str] = {}
    for ingredients in ingredient_lists:
        for ing in ingredients:
            k = _key(ing)
            if not k:
                continue
            counts[k] = counts.get(k, 0) + 1
            display.setdefault(k, ing.strip())

    shopping: Dict[str, List[str]] = {cat: [] for cat in SHOPPING_CATEGORIES}
    for k in sorted(counts, key=lambda x: display[x].lower()):
        shopping[categorize_ingredient(display[k])].append(_render(display[k], counts[k]))
    return shopping


def build_shopping_list(menu: WeeklyMenu) -> Dict[str, List[str]]:
    """Shopping list for every meal of the menu, recomputed from scratch."""
    lists = []
    for day in menu.days():
        for slot in menu.slots(day):
            name = menu.get_meal(day, slot)
            if name:
                lists.append(recipe_for_meal(name, slot).ingredients)
    return aggregate_ingredients(lists)


_CATEGORY_ALIASES = {"grains": "carbs", "protein": "proteins", "vegetable": "vegetables",
                     "fruit": "fruits", "other": "others"}


def normalize_shopping_list(raw: Any) -> Dict[str, List[str]]:
    """Clean a categorized list from an external source (e.g. the AI menu).

    Known categories are kept, aliases mapped, unknown ones merged into
    'others'; blank and duplicate items (by normalized name) are dropped.
    """
    shopping: Dict[str, List[str]] = {cat: [] for cat in SHOPPING_CATEGORIES}
    if not isinstance(raw, dict):
        return shopping
    seen = set()
    for category, items in raw.items():
        cat = _normalize(str(category))
        cat = _CATEGORY_ALIASES.get(cat, cat)
        if cat not in shopping:
            cat = "others"
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, str) or not item.strip():
                continue
            k = _key(item)
            if k in seen:
                continue
            seen.add(k)
            shopping[cat].append(item.strip())
    return shopping


__all__ = ['build_shopping_list', 'aggregate_ingredients', 'categorize_ingredient', 'normalize_shopping_list']
