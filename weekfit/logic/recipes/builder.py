"""Heuristic recipe builder.

Derives a plausible recipe from a meal name alone: ingredients come from an
ordered table of name patterns, instructions and timings from the dish kind.
"""
import re
from typing import List, Tuple

from weekfit.domain.Recipe import Recipe

# Ordered: specific phrases first; a matched phrase is removed from the name
# so e.g. "cottage cheese" does not also yield plain "Cheese".
_INGREDIENT_PATTERNS: List[Tuple[str, List[str]]] = [
    (r"peanut butter", ["Peanut butter"]),
    (r"almond milk", ["Almond milk"]),
    (r"cottage cheese", ["Cottage cheese"]),
    (r"greek yogurt|yogurt", ["Greek yogurt"]),
    (r"zucchini noodles", ["Zucchini"]),
    (r"sweet potato(es)?( wedges| mash)?", ["Sweet potatoes"]),
    (r"brown rice", ["Brown rice"]),
    (r"rice cakes?", ["Rice cakes"]),
    (r"cherry tomato(es)?", ["Cherry tomatoes"]),
    (r"dried fruit", ["Dried fruit"]),
    (r"mixed nuts", ["Mixed nuts"]),
    (r"green salad", ["Lettuce", "Cucumber"]),
    (r"veggie burger", ["Veggie patties", "Wholegrain buns"]),
    (r"chickpea burger", ["Chickpeas", "Wholegrain buns"]),
    (r"eggplant", ["Eggplant"]),
    (r"\beggs?\b", ["Eggs"]),
    (r"\boat(s|meal)?\b", ["Rolled oats"]),
    (r"banana", ["Banana"]),
    (r"honey", ["Honey"]),
    (r"chia", ["Chia seeds"]),
    (r"granola", ["Granola"]),
    (r"strawberr(y|ies)", ["Strawberries"]),
    (r"berr(y|ies)", ["Mixed berries"]),
    (r"pancakes?", ["Wholegrain flour", "Baking powder"]),
    (r"avocado", ["Avocado"]),
    (r"spinach", ["Spinach"]),
    (r"ricotta", ["Ricotta"]),
    (r"caprese", ["Mozzarella", "Tomatoes", "Basil"]),
    (r"halloumi", ["Halloumi"]),
    (r"feta", ["Feta cheese"]),
    (r"parmesan", ["Parmesan"]),
    (r"cheese", ["Cheese"]),
    (r"toast|bread|sandwich", ["Wholegrain bread"]),
    (r"chicken", ["Chicken breast"]),
    (r"turkey", ["Turkey breast"]),
    (r"meatballs?", ["Garlic", "Onions"]),
    (r"beef", ["Lean beef"]),
    (r"salmon", ["Salmon fillet"]),
    (r"tuna", ["Canned tuna"]),
    (r"shrimp", ["Shrimp"]),
    (r"fish", ["White fish fillet"]),
    (r"tofu", ["Firm tofu"]),
    (r"lentils?", ["Lentils"]),
    (r"chickpeas?", ["Chickpeas"]),
    (r"beans?", ["Black beans"]),
    (r"quinoa", ["Quinoa"]),
    (r"risotto", ["Arborio rice", "Vegetable stock"]),
    (r"\brice\b", ["Rice"]),
    (r"couscous", ["Couscous"]),
    (r"pasta|lasagna", ["Wholegrain pasta"]),
    (r"noodles", ["Noodles"]),
    (r"wrap|burrito|quesadilla", ["Wholegrain tortillas"]),
    (r"broccoli", ["Broccoli"]),
    (r"asparagus", ["Asparagus"]),
    (r"mushrooms?", ["Mushrooms"]),
    (r"peppers?", ["Bell peppers"]),
    (r"carrots?", ["Carrots"]),
    (r"tomato(es)?", ["Tomatoes"]),
    (r"potato(es)?", ["Potatoes"]),
    (r"mango", ["Mango"]),
    (r"apples?", ["Apples"]),
    (r"hummus", ["Hummus"]),
    (r"curry", ["Curry powder", "Onions", "Garlic"]),
    (r"chili", ["Tomatoes", "Chili powder", "Onions"]),
    (r"stir fry", ["Soy sauce", "Garlic"]),
    (r"shepherd", ["Onions", "Carrots"]),
    (r"soup", ["Vegetable stock", "Onions", "Carrots"]),
    (r"vegetables?|veggie", ["Zucchini", "Carrots", "Bell peppers"]),
    (r"salad", ["Lettuce", "Tomatoes", "Cucumber"]),
    (r"seeds", ["Mixed seeds"]),
    (r"almonds?", ["Almonds"]),
    (r"smoothie", ["Almond milk"]),
    (r"fruit", ["Seasonal fruit"]),
]

_FALLBACK_INGREDIENTS = ["Seasonal vegetables", "Olive oil", "Salt", "Spices"]

_SNACK_SLOTS = ("breakfast", "morning_snack", "afternoon_snack", "supper")


def _ingredients_for(name: str) -> List[str]:
    text = name.lower()
    found: List[str] = []
    for pattern, items in _INGREDIENT_PATTERNS:
        if re.search(pattern, text):
            for item in items:
                if item not in found:
                    found.append(item)
            text = re.sub(pattern, " ", text)
    return found


def dish_kind(name: str) -> str:
    n = name.lower()
    if "smoothie" in n:
        return "smoothie"
    if "salad" in n:
        return "salad"
    if "soup" in n or "chili" in n or "curry" in n:
        return "stew"
    if "omelette" in n or "scramble" in n or ("egg" in n and "eggplant" not in n):
        return "eggs"
    if "oatmeal" in n or "pudding" in n or "bowl" in n or "yogurt" in n:
        return "bowl"
    if any(k in n for k in ("toast", "wrap", "sandwich", "burrito", "quesadilla")):
        return "assembled"
    if any(k in n for k in ("apple", "nuts", "hummus", "rice cake", "fruit")):
        return "no_cook"
    return "cooked"


_INSTRUCTIONS = {
    "smoothie": ["Add all ingredients to the blender", "Blend until smooth", "Serve chilled"],
    "salad": ["Wash and chop the ingredients", "Combine everything in a large bowl",
              "Season with olive oil, lemon and salt", "Serve immediately"],
    "stew": ["Chop the vegetables", "Sauté onions and garlic in a pot",
             "Add the remaining ingredients and cover with liquid", "Simmer until tender", "Adjust seasoning and serve"],
    "eggs": ["Beat the eggs with a pinch of salt", "Cook the fillings in a non-stick pan",
             "Pour in the eggs and cook over low heat", "Serve warm"],
    "bowl": ["Prepare the base in a bowl", "Add the toppings", "Serve"],
    "assembled": ["Prepare and slice the fillings", "Warm or toast the base", "Assemble and serve"],
    "no_cook": ["Portion the ingredients", "Serve"],
    "cooked": ["Prepare and season the ingredients", "Cook the protein until done",
               "Cook the sides and vegetables", "Plate everything together and serve"],
}

# (prep, cook) minutes per dish kind
_TIMES = {
    "smoothie": (5, 0),
    "salad": (15, 0),
    "stew": (15, 30),
    "eggs": (5, 10),
    "bowl": (5, 5),
    "assembled": (10, 5),
    "no_cook": (5, 0),
    "cooked": (15, 25),
}


def recipe_for_meal(meal_name: str, slot: str = "") -> Recipe:
    """Build a Recipe for a generated meal name."""
    if not meal_name or not meal_name.strip():
        raise ValueError("Meal name cannot be empty")
    kind = dish_kind(meal_name)
    ingredients = _ingredients_for(meal_name) or list(_FALLBACK_INGREDIENTS)
    if kind in ("cooked", "stew", "eggs") and "Olive oil" not in ingredients:
        ingredients.append("Olive oil")
    prep, cook = _TIMES[kind]
    if "risotto" in meal_name.lower() or "lasagna" in meal_name.lower():
        cook += 20
    servings = 1 if slot in _SNACK_SLOTS else 2
    return Recipe(
        meal_name=meal_name.strip(),
        ingredients=ingredients,
        instructions=list(_INSTRUCTIONS[kind]),
        prep_time=prep,
        cook_time=cook,
        servings=servings,
    )
