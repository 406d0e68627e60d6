from typing import Final

DAYS: Final[list[str]] = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
DAY_LABELS: Final[dict[str, str]] = {d: d.capitalize() for d in DAYS}

DEFAULT_SLOTS: Final[list[str]] = ["breakfast", "lunch", "dinner"]
SLOT_ORDER: Final[list[str]] = ["breakfast", "morning_snack", "lunch", "afternoon_snack", "dinner", "supper"]
SLOT_LABELS: Final[dict[str, str]] = {
    "breakfast": "Breakfast",
    "morning_snack": "Morning snack",
    "lunch": "Lunch",
    "afternoon_snack": "Afternoon snack",
    "dinner": "Dinner",
    "supper": "Supper",
}

SHOPPING_CATEGORIES: Final[list[str]] = ["proteins", "carbs", "vegetables", "fruits", "dairy", "others"]

# Questionnaire definitions (order matters: one step per entry)
QUESTIONS: Final[list[dict]] = [
    {
        "id": "goal",
        "title": "What is your main goal?",
        "subtitle": "We will tailor your menu around it",
        "type": "single",
        "options": [
            {"value": "weight_loss", "label": "Weight loss", "desc": "Focus on a caloric deficit"},
            {"value": "muscle_gain", "label": "Muscle gain", "desc": "Focus on a caloric surplus"},
            {"value": "maintenance", "label": "Maintenance", "desc": "Keep your current weight"},
            {"value": "healthy", "label": "Healthy living", "desc": "Focus on balanced nutrition"},
        ],
    },
    {
        "id": "restrictions",
        "title": "Do you have any dietary restrictions?",
        "subtitle": "Select all that apply",
        "type": "multiple",
        "options": [
            {"value": "vegetarian", "label": "Vegetarian", "desc": ""},
            {"value": "vegan", "label": "Vegan", "desc": ""},
            {"value": "lactose_free", "label": "Lactose free", "desc": ""},
            {"value": "gluten_free", "label": "Gluten free", "desc": ""},
            {"value": "diabetic", "label": "Diabetic", "desc": ""},
            {"value": "none", "label": "None", "desc": ""},
        ],
    },
    {
        "id": "budget",
        "title": "What is your weekly food budget?",
        "subtitle": "Recipes that fit your pocket",
        "type": "single",
        "options": [
            {"value": "economy", "label": "Up to $20", "desc": "Budget recipes"},
            {"value": "moderate", "label": "$20 - $40", "desc": "Good value"},
            {"value": "comfortable", "label": "$40 - $60", "desc": "More variety"},
            {"value": "premium", "label": "Over $60", "desc": "Premium ingredients"},
        ],
    },
    {
        "id": "time",
        "title": "How much time do you have to cook?",
        "subtitle": "Recipes adapted to your routine",
        "type": "single",
        "options": [
            {"value": "quick", "label": "15-30 min", "desc": "Quick recipes"},
            {"value": "moderate", "label": "30-60 min", "desc": "Balanced recipes"},
            {"value": "elaborate", "label": "1h+", "desc": "Elaborate recipes"},
            {"value": "meal_prep", "label": "Meal prep", "desc": "Cook everything on Sunday"},
        ],
    },
    {
        "id": "experience",
        "title": "What is your level in the kitchen?",
        "subtitle": "Recipes that match your skills",
        "type": "single",
        "options": [
            {"value": "beginner", "label": "Beginner", "desc": "Very simple recipes"},
            {"value": "intermediate", "label": "Intermediate", "desc": "Some experience"},
            {"value": "advanced", "label": "Advanced", "desc": "I like a challenge"},
        ],
    },
    {
        "id": "cuisines",
        "title": "Which cuisines do you prefer?",
        "subtitle": "Pick your favourites",
        "type": "multiple",
        "options": [
            {"value": "brazilian", "label": "Brazilian", "desc": ""},
            {"value": "italian", "label": "Italian", "desc": ""},
            {"value": "asian", "label": "Asian", "desc": ""},
            {"value": "mediterranean", "label": "Mediterranean", "desc": ""},
            {"value": "mexican", "label": "Mexican", "desc": ""},
            {"value": "fit", "label": "Fit/Light", "desc": ""},
        ],
    },
    {
        "id": "meals",
        "title": "Which meals do you want in the menu?",
        "subtitle": "We will build it around your routine",
        "type": "multiple",
        "options": [
            {"value": "breakfast", "label": "Breakfast", "desc": ""},
            {"value": "lunch", "label": "Lunch", "desc": ""},
            {"value": "afternoon_snack", "label": "Afternoon snack", "desc": ""},
            {"value": "dinner", "label": "Dinner", "desc": ""},
            {"value": "supper", "label": "Supper", "desc": ""},
        ],
    },
]

# Gamification
LEVELS: Final[list[str]] = ["Bronze", "Silver", "Gold", "Platinum", "Diamond"]
NEXT_LEVEL_POINTS: Final[dict[str, int]] = {
    "Bronze": 500,
    "Silver": 1500,
    "Gold": 3000,
    "Platinum": 5000,
}
MAX_LEVEL_POINTS: Final[int] = 10000

DEFAULT_CHALLENGES: Final[list[dict]] = [
    {
        "title": "Complete your first menu",
        "description": "Generate your first weekly menu with our AI",
        "points_reward": 100,
        "challenge_type": "weekly",
    },
    {
        "title": "Use the shopping list",
        "description": "Do your groceries with the smart shopping list",
        "points_reward": 50,
        "challenge_type": "weekly",
    },
    {
        "title": "Keep the streak",
        "description": "Use WeekFit for 7 days in a row",
        "points_reward": 200,
        "challenge_type": "weekly",
    },
]

DAILY_CHALLENGE_TEMPLATES: Final[list[dict]] = [
    {"type": "log_breakfast", "description": "Log your breakfast", "points": 10},
    {"type": "log_lunch", "description": "Log your lunch", "points": 10},
    {"type": "log_dinner", "description": "Log your dinner", "points": 10},
    {"type": "drink_water", "description": "Drink 8 glasses of water", "points": 15},
    {"type": "try_new_recipe", "description": "Try a new recipe", "points": 20},
]
DAILY_CHALLENGES_PER_DAY: Final[int] = 3

DEFAULT_ACHIEVEMENTS: Final[list[dict]] = [
    {"id": "streak-3", "name": "Warming up", "description": "Keep a 3 day streak", "icon": "🔥",
     "points": 30, "requirement_type": "streak", "requirement_value": 3},
    {"id": "streak-7", "name": "One full week", "description": "Keep a 7 day streak", "icon": "📅",
     "points": 70, "requirement_type": "streak", "requirement_value": 7},
    {"id": "streak-30", "name": "Habit builder", "description": "Keep a 30 day streak", "icon": "🏆",
     "points": 300, "requirement_type": "streak", "requirement_value": 30},
    {"id": "meals-1", "name": "First bite", "description": "Log your first meal", "icon": "🍽️",
     "points": 10, "requirement_type": "meals_logged", "requirement_value": 1},
    {"id": "meals-10", "name": "Consistent eater", "description": "Log 10 meals", "icon": "🥗",
     "points": 50, "requirement_type": "meals_logged", "requirement_value": 10},
    {"id": "meals-50", "name": "Meal master", "description": "Log 50 meals", "icon": "👩‍🍳",
     "points": 250, "requirement_type": "meals_logged", "requirement_value": 50},
]

PROGRESS_HISTORY_LIMIT: Final[int] = 30

# Shown when the user has no saved menu anywhere
SAMPLE_MENU: Final[dict] = {
    "meals": {
        "monday": {
            "breakfast": "Oatmeal with berries and honey",
            "lunch": "Grilled chicken with quinoa and sautéed vegetables",
            "dinner": "Baked salmon with sweet potato and asparagus",
        },
        "tuesday": {
            "breakfast": "Banana oat smoothie with almond milk",
            "lunch": "Tuna salad with chickpeas",
            "dinner": "Turkey breast with brown rice and broccoli",
        },
        "wednesday": {
            "breakfast": "Greek yogurt with granola and fruit",
            "lunch": "Baked fish with sweet potato mash",
            "dinner": "Vegetable omelette with green salad",
        },
        "thursday": {
            "breakfast": "Green smoothie with spinach and oats",
            "lunch": "Lean beef with quinoa salad",
            "dinner": "Roast chicken with potatoes and carrots",
        },
        "friday": {
            "breakfast": "Oat pancakes with fruit",
            "lunch": "Chicken wrap with vegetables",
            "dinner": "Fish with brown rice and steamed vegetables",
        },
        "saturday": {
            "breakfast": "Fruit smoothie with granola",
            "lunch": "Chicken burger with salad",
            "dinner": "Vegetable soup with chicken",
        },
        "sunday": {
            "breakfast": "Wholegrain toast with avocado",
            "lunch": "Complete salad with protein",
            "dinner": "Light soup with a wholegrain sandwich",
        },
    },
    "shopping_list": {
        "proteins": ["Chicken (1.5kg)", "Salmon (800g)", "Canned tuna (3)", "Eggs (12)", "Turkey breast (500g)"],
        "carbs": ["Quinoa (500g)", "Sweet potatoes (1.5kg)", "Brown rice (1kg)", "Rolled oats (500g)",
                  "Wholegrain bread (1)"],
        "vegetables": ["Broccoli (2)", "Carrots (1kg)", "Zucchini (3)", "Spinach (2 bunches)", "Tomatoes (1kg)",
                       "Onions (5)", "Asparagus (1 bunch)"],
        "fruits": ["Bananas (1.5kg)", "Apples (8)", "Mixed berries (500g)", "Avocados (3)", "Lemons (6)"],
        "dairy": ["Natural yogurt (1L)", "Almond milk (1L)", "Cheese (300g)"],
        "others": ["Olive oil", "Honey", "Granola", "Assorted spices", "Canned chickpeas"],
    },
}

# AI prompts
RECIPE_SYSTEM_PROMPT: Final[str] = (
    "You are a nutritionist who creates personalised recipes.\n"
    "Your recipes must be practical, healthy and adapted to the user's goals and restrictions.\n"
    "Always provide estimated nutrition information (calories, protein, carbs, fat).\n"
    "Be concise but detailed in the instructions."
)
RECIPE_JSON_FORMAT: Final[str] = (
    """
{
  "name": "Recipe name",
  "description": "Short appetising description",
  "prepTime": "15 min",
  "servings": 2,
  "difficulty": "Easy",
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "instructions": ["step 1", "step 2", ...],
  "nutrition": {
    "calories": 400,
    "protein": "30g",
    "carbs": "45g",
    "fat": "12g"
  },
  "tags": ["tag1", "tag2"]
}"""
)
WEEKLY_MENU_SYSTEM_PROMPT: Final[str] = (
    "You are a nutritionist specialised in weekly meal planning.\n"
    "Create complete, balanced menus adapted to the user's goals and restrictions.\n"
    "Consider variety, practicality and nutritional adequacy.\n"
    "Always include breakfast, lunch, dinner and 2 snacks for every day."
)
WEEKLY_MENU_JSON_FORMAT: Final[str] = (
    """
{
  "weeklyMenu": [
    {
      "day": "Monday",
      "meals": {
        "breakfast": { "name": "Name", "calories": 400, "time": "10 min" },
        "morning_snack": { "name": "Name", "calories": 150, "time": "5 min" },
        "lunch": { "name": "Name", "calories": 600, "time": "30 min" },
        "afternoon_snack": { "name": "Name", "calories": 150, "time": "5 min" },
        "dinner": { "name": "Name", "calories": 500, "time": "25 min" }
      },
      "total_calories": 1800,
      "macros": { "protein": "120g", "carbs": "200g", "fat": "60g" }
    }
  ],
  "shopping_list": {
    "fruits": ["item 1", "item 2"],
    "vegetables": ["item 1", "item 2"],
    "proteins": ["item 1", "item 2"],
    "grains": ["item 1", "item 2"],
    "dairy": ["item 1", "item 2"],
    "others": ["item 1", "item 2"]
  },
  "tips": ["tip 1", "tip 2", "tip 3"]
}"""
)

AI_RATE_LIMIT_MESSAGE: Final[str] = "Rate limit exceeded. Please try again in a few moments."
AI_NO_CREDITS_MESSAGE: Final[str] = "Insufficient credits. Add funds to your AI workspace."

# Marketing site content
FEATURES: Final[list[dict]] = [
    {"title": "AI questionnaire", "description": "Seven quick questions shape a menu around your goal and routine."},
    {"title": "7-day menu", "description": "Breakfast to dinner planned for the whole week, adapted to your diet."},
    {"title": "Smart shopping list", "description": "Ingredients aggregated and grouped by aisle, no duplicates."},
    {"title": "Recipe assistant", "description": "Tell us what is in your fridge and get recipe ideas instantly."},
    {"title": "Challenges and levels", "description": "Earn points, keep streaks and climb from Bronze to Diamond."},
    {"title": "Progress tracking", "description": "Log weight, body fat and measurements and watch the trend."},
]

PRICING_PLANS: Final[list[dict]] = [
    {
        "name": "Starter",
        "price": "29",
        "period": "/month",
        "description": "Perfect to start your journey",
        "badge": None,
        "features": ["Personalised AI questionnaire", "7-day menu", "Automatic shopping list",
                     "5 swaps per week", "Detailed recipes", "Email support"],
        "button_text": "Start now",
    },
    {
        "name": "Premium",
        "price": "59",
        "period": "/month",
        "description": "Maximum personalisation and flexibility",
        "badge": "Most popular",
        "features": ["Everything in Starter", "Unlimited swaps", "30-day menus", "Full nutrition analysis",
                     "Fitness app integration", "24/7 AI chat", "Exclusive recipes", "Meal planning"],
        "button_text": "Upgrade to Premium",
    },
    {
        "name": "Executive",
        "price": "149",
        "period": "/month",
        "description": "Complete solution for high performance",
        "badge": "VIP",
        "features": ["Everything in Premium", "Personal AI nutritionist", "Menus for the whole family",
                     "Ingredient delivery*", "Nutrition consulting", "Executive reports",
                     "Integration API", "Priority 24/7 support"],
        "button_text": "Request a demo",
    },
]

TESTIMONIALS: Final[list[dict]] = [
    {"name": "Maria Silva", "role": "Lawyer", "rating": 5,
     "content": "I lost 8kg in three months without feeling like I was on a diet."},
    {"name": "João Santos", "role": "Engineer", "rating": 5,
     "content": "The shopping list alone saves me an hour every week."},
    {"name": "Ana Oliveira", "role": "Teacher", "rating": 5,
     "content": "Finally vegetarian menus that are not just salad."},
    {"name": "Carlos Mendes", "role": "Entrepreneur", "rating": 4,
     "content": "Meal prep on Sundays became simple and fast."},
    {"name": "Fernanda Costa", "role": "Nurse", "rating": 5,
     "content": "The challenges keep me motivated day after day."},
    {"name": "Roberto Lima", "role": "Personal trainer", "rating": 5,
     "content": "I recommend it to all my students who want to gain muscle."},
]
