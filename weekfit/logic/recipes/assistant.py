"""Recipe assistant: 'what can I cook with what I have?'

Matches comma-separated ingredients against a small keyword catalog. With no
match it returns two generic recipes built from the user's own ingredients.
"""
import re
from typing import Dict, List, Set

from weekfit.domain.Recipe import Recipe

MAX_SUGGESTIONS = 3

RECIPE_CATALOG: List[Dict] = [
    {
        "keywords": ["chicken", "breast"],
        "recipe": {
            "id": "chicken-1",
            "meal_name": "Seasoned grilled chicken",
            "ingredients": ["500g chicken breast", "Garlic", "Onion", "Seasoning", "Olive oil"],
            "instructions": ["Season the chicken", "Grill for 15 minutes", "Serve hot"],
            "prep_time": 10, "cook_time": 15, "servings": 2,
        },
    },
    {
        "keywords": ["egg", "eggs"],
        "recipe": {
            "id": "egg-1",
            "meal_name": "Vegetable omelette",
            "ingredients": ["3 eggs", "Onion", "Tomato", "Seasoning", "Olive oil"],
            "instructions": ["Beat the eggs", "Sauté the vegetables", "Cook the omelette"],
            "prep_time": 5, "cook_time": 8, "servings": 1,
        },
    },
    {
        "keywords": ["banana", "oats", "oat"],
        "recipe": {
            "id": "smoothie-1",
            "meal_name": "Energy smoothie",
            "ingredients": ["1 banana", "2 tablespoons of oats", "1 cup of milk", "Honey"],
            "instructions": ["Blend everything", "Serve chilled"],
            "prep_time": 3, "cook_time": 0, "servings": 1,
        },
    },
    {
        "keywords": ["rice"],
        "recipe": {
            "id": "rice-1",
            "meal_name": "Brown rice with vegetables",
            "ingredients": ["1 cup of brown rice", "Carrot", "Broccoli", "Vegetable stock"],
            "instructions": ["Sauté the vegetables", "Add rice and stock", "Cook for 25 min"],
            "prep_time": 10, "cook_time": 25, "servings": 2,
        },
    },
    {
        "keywords": ["tuna", "fish", "salmon"],
        "recipe": {
            "id": "fish-1",
            "meal_name": "Lemon baked fish",
            "ingredients": ["2 fish fillets", "Lemon", "Garlic", "Parsley", "Olive oil"],
            "instructions": ["Season the fish with lemon and garlic", "Bake at 200°C for 18 minutes", "Garnish and serve"],
            "prep_time": 10, "cook_time": 18, "servings": 2,
        },
    },
    {
        "keywords": ["pasta", "tomato"],
        "recipe": {
            "id": "pasta-1",
            "meal_name": "Quick tomato pasta",
            "ingredients": ["200g wholegrain pasta", "3 tomatoes", "Garlic", "Basil", "Olive oil"],
            "instructions": ["Cook the pasta", "Make a quick sauce with tomato and garlic", "Toss and serve"],
            "prep_time": 5, "cook_time": 15, "servings": 2,
        },
    },
]


def parse_ingredients(text: str) -> List[str]:
    return [i.strip().lower() for i in (text or "").split(",") if i.strip()]


def _words(ingredient: str) -> Set[str]:
    """Whole words of an ingredient with simple plurals folded (tomatoes -> tomato, oats -> oat)."""
    words = set()
    for word in re.findall(r"[a-z]+", ingredient):
        words.add(word)
        if word.endswith("es"):
            words.add(word[:-2])
        if word.endswith("s"):
            words.add(word[:-1])
    return words


def suggest_recipes(text: str) -> List[Recipe]:
    """Up to MAX_SUGGESTIONS recipes for the comma-separated ingredient text.

    Raises ValueError when no ingredient was given.
    """
    ingredients = parse_ingredients(text)
    if not ingredients:
        raise ValueError("Type a few ingredients first")

    words = set().union(*(_words(i) for i in ingredients))
    matches = [entry["recipe"] for entry in RECIPE_CATALOG if words & set(entry["keywords"])]
    if matches:
        return [Recipe.from_dict(r) for r in matches[:MAX_SUGGESTIONS]]

    own = [i[:1].upper() + i[1:] for i in ingredients]
    return [
        Recipe(meal_name="Complete salad", ingredients=own,
               instructions=["Wash and chop the ingredients", "Mix everything", "Season to taste"],
               prep_time=10, cook_time=0, servings=1),
        Recipe(meal_name="Nutritious sauté", ingredients=own,
               instructions=["Chop all the ingredients", "Sauté over medium heat", "Season and serve"],
               prep_time=8, cook_time=12, servings=2),
    ]
