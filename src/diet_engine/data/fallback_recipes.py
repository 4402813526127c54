"""Static Korean home-style recipe catalog used when the provider is unavailable."""

from diet_engine.domain.recipes import (
    ALL_SLOTS,
    CourseCategory,
    DishRecord,
    Ingredient,
    MealSlot,
    NutritionFacts,
)

_LUNCH_DINNER = frozenset({MealSlot.LUNCH, MealSlot.DINNER})
_BREAKFAST_LUNCH = frozenset({MealSlot.BREAKFAST, MealSlot.LUNCH})
_YEAR_ROUND = frozenset(range(1, 13))

BANANA_TITLE = "Banana"
STRAWBERRY_TITLE = "Strawberries"


def _dish(
    title: str,
    category: CourseCategory,
    ingredients: list[tuple[str, str, str]],
    preparation: str,
    nutrition: NutritionFacts,
    meal_slots: frozenset[MealSlot] = ALL_SLOTS,
) -> DishRecord:
    return DishRecord(
        title=title,
        ingredients=tuple(Ingredient(name, amount, unit) for name, amount, unit in ingredients),
        preparation=preparation,
        nutrition=nutrition,
        categories=frozenset({category}),
        meal_slots=meal_slots,
    )


def _fruit(
    title: str,
    serving: str,
    nutrition: NutritionFacts,
    season_months: frozenset[int],
    avoid_for: frozenset[str] = frozenset(),
) -> DishRecord:
    return DishRecord(
        title=title,
        ingredients=(Ingredient(title.lower(), serving, "g"),),
        preparation="Wash and serve fresh.",
        nutrition=nutrition,
        categories=frozenset({CourseCategory.SNACK}),
        meal_slots=frozenset(),
        season_months=season_months,
        avoid_for_conditions=avoid_for,
    )


STAPLES = [
    _dish(
        "Steamed white rice",
        CourseCategory.STAPLE,
        [("rice", "100", "g"), ("water", "120", "ml")],
        "Rinse the rice, soak for 30 minutes and cook in a rice cooker.",
        NutritionFacts(calories=310, protein_g=5.5, carbs_g=68.0, fat_g=0.5, fiber_g=0.6),
    ),
    _dish(
        "Brown rice",
        CourseCategory.STAPLE,
        [("brown rice", "100", "g"), ("water", "150", "ml")],
        "Rinse the brown rice, soak for at least 2 hours and cook in a rice cooker.",
        NutritionFacts(calories=330, protein_g=6.8, carbs_g=72.0, fat_g=2.3, fiber_g=3.5),
    ),
    _dish(
        "Multigrain rice",
        CourseCategory.STAPLE,
        [("rice", "70", "g"), ("mixed grains", "30", "g"), ("water", "140", "ml")],
        "Rinse the rice and grains, soak for 1 hour and cook in a rice cooker.",
        NutritionFacts(calories=320, protein_g=7.2, carbs_g=69.0, fat_g=1.8, fiber_g=4.0),
    ),
]

SIDES = [
    _dish(
        "Seasoned spinach",
        CourseCategory.SIDE,
        [("spinach", "200", "g"), ("sesame oil", "1", "tbsp"), ("garlic", "1", "clove")],
        "Blanch the spinach, squeeze out the water and toss with sesame oil and garlic.",
        NutritionFacts(calories=45, protein_g=2.5, carbs_g=4.0, fat_g=2.5, sodium_mg=15, fiber_g=2.0),
    ),
    _dish(
        "Seasoned bean sprouts",
        CourseCategory.SIDE,
        [("soybean sprouts", "200", "g"), ("sesame oil", "1", "tsp"), ("green onion", "10", "g")],
        "Boil the sprouts, drain and toss with sesame oil and green onion.",
        NutritionFacts(calories=40, protein_g=4.0, carbs_g=5.0, fat_g=1.5, sodium_mg=10, fiber_g=1.5),
    ),
    _dish(
        "Stir-fried sweet potato stems",
        CourseCategory.SIDE,
        [("sweet potato stems", "150", "g"), ("perilla oil", "1", "tbsp")],
        "Blanch the stems and stir-fry in perilla oil with garlic.",
        NutritionFacts(calories=80, protein_g=2.0, carbs_g=8.0, fat_g=4.5, sodium_mg=20, fiber_g=2.5),
        meal_slots=_LUNCH_DINNER,
    ),
    _dish(
        "Seasoned eggplant",
        CourseCategory.SIDE,
        [("eggplant", "2", "ea"), ("soy sauce", "1", "tbsp"), ("sesame oil", "1", "tsp")],
        "Steam the eggplant, tear into strips and season with soy sauce and sesame oil.",
        NutritionFacts(calories=50, protein_g=1.5, carbs_g=7.0, fat_g=2.0, sodium_mg=350, fiber_g=3.0),
    ),
    _dish(
        "Cucumber salad",
        CourseCategory.SIDE,
        [("cucumber", "1", "ea"), ("vinegar", "1", "tbsp"), ("chili flakes", "1", "tsp")],
        "Slice the cucumber and toss with vinegar and chili flakes.",
        NutritionFacts(calories=35, protein_g=1.0, carbs_g=7.0, fat_g=0.3, sodium_mg=5, fiber_g=1.0),
    ),
    _dish(
        "Braised potatoes",
        CourseCategory.SIDE,
        [("potato", "2", "ea"), ("soy sauce", "2", "tbsp"), ("rice syrup", "1", "tbsp")],
        "Cube the potatoes and simmer in soy sauce and rice syrup until glazed.",
        NutritionFacts(calories=120, protein_g=2.5, carbs_g=25.0, fat_g=1.5, sodium_mg=450, fiber_g=2.5),
        meal_slots=_LUNCH_DINNER,
    ),
    _dish(
        "Braised tofu",
        CourseCategory.SIDE,
        [("tofu", "1", "block"), ("soy sauce", "2", "tbsp"), ("chili flakes", "1", "tsp")],
        "Pan-fry the tofu slices and simmer in seasoned soy sauce.",
        NutritionFacts(calories=100, protein_g=8.0, carbs_g=4.0, fat_g=5.0, sodium_mg=400, fiber_g=1.0),
    ),
    _dish(
        "Steamed egg",
        CourseCategory.SIDE,
        [("egg", "3", "ea"), ("water", "150", "ml"), ("green onion", "10", "g")],
        "Whisk the eggs with water and steam gently until set.",
        NutritionFacts(calories=110, protein_g=9.0, carbs_g=1.5, fat_g=7.5, sodium_mg=150, fiber_g=0),
    ),
    _dish(
        "Stir-fried zucchini",
        CourseCategory.SIDE,
        [("zucchini", "1", "ea"), ("garlic", "1", "clove"), ("salted shrimp", "1", "tsp")],
        "Slice the zucchini and stir-fry with garlic and salted shrimp.",
        NutritionFacts(calories=60, protein_g=2.0, carbs_g=8.0, fat_g=2.5, sodium_mg=10, fiber_g=2.0),
    ),
    _dish(
        "Spicy radish salad",
        CourseCategory.SIDE,
        [("radish", "200", "g"), ("chili flakes", "1", "tbsp"), ("vinegar", "1", "tbsp")],
        "Julienne the radish and toss with chili flakes and vinegar.",
        NutritionFacts(calories=40, protein_g=1.0, carbs_g=8.5, fat_g=0.2, sodium_mg=5, fiber_g=1.5),
    ),
    _dish(
        "Seasoned broccoli",
        CourseCategory.SIDE,
        [("broccoli", "150", "g"), ("sesame seeds", "1", "tsp"), ("sesame oil", "1", "tsp")],
        "Blanch the florets and toss with sesame seeds and sesame oil.",
        NutritionFacts(calories=45, protein_g=3.5, carbs_g=6.0, fat_g=1.5, sodium_mg=30, fiber_g=3.0),
    ),
    _dish(
        "Stir-fried anchovies",
        CourseCategory.SIDE,
        [("dried anchovies", "50", "g"), ("rice syrup", "1", "tbsp"), ("almonds", "10", "g")],
        "Toast the anchovies in a dry pan and glaze with rice syrup and almonds.",
        NutritionFacts(calories=95, protein_g=11.0, carbs_g=6.0, fat_g=3.0, sodium_mg=420, fiber_g=0.5),
        meal_slots=_LUNCH_DINNER,
    ),
]

SOUPS_AND_STEWS = [
    _dish(
        "Soybean paste soup",
        CourseCategory.SOUP_OR_STEW,
        [("soybean paste", "1", "tbsp"), ("tofu", "100", "g"), ("anchovy stock", "400", "ml")],
        "Dissolve the paste in stock and simmer with tofu and vegetables.",
        NutritionFacts(calories=60, protein_g=4.0, carbs_g=6.0, fat_g=2.0, sodium_mg=650, fiber_g=1.5),
    ),
    _dish(
        "Seaweed soup",
        CourseCategory.SOUP_OR_STEW,
        [("dried seaweed", "10", "g"), ("beef", "50", "g"), ("soup soy sauce", "1", "tbsp")],
        "Saute the soaked seaweed with beef in sesame oil, add water and simmer.",
        NutritionFacts(calories=80, protein_g=8.0, carbs_g=4.0, fat_g=3.5, sodium_mg=450, fiber_g=1.0),
    ),
    _dish(
        "Bean sprout soup",
        CourseCategory.SOUP_OR_STEW,
        [("soybean sprouts", "150", "g"), ("anchovy stock", "400", "ml"), ("garlic", "1", "clove")],
        "Boil the sprouts in anchovy stock and season lightly.",
        NutritionFacts(calories=45, protein_g=4.0, carbs_g=5.0, fat_g=1.0, sodium_mg=420, fiber_g=1.5),
    ),
    _dish(
        "Dried pollock soup",
        CourseCategory.SOUP_OR_STEW,
        [("dried pollock", "30", "g"), ("egg", "1", "ea"), ("radish", "50", "g")],
        "Saute the pollock in sesame oil, add water and radish, then stir in egg.",
        NutritionFacts(calories=70, protein_g=12.0, carbs_g=4.0, fat_g=0.5, sodium_mg=480, fiber_g=1.0),
        meal_slots=_BREAKFAST_LUNCH,
    ),
    _dish(
        "Radish soup",
        CourseCategory.SOUP_OR_STEW,
        [("radish", "150", "g"), ("beef", "40", "g"), ("soup soy sauce", "1", "tbsp")],
        "Simmer sliced radish with beef until the radish turns translucent.",
        NutritionFacts(calories=40, protein_g=2.0, carbs_g=7.0, fat_g=0.5, sodium_mg=450, fiber_g=1.5),
    ),
    _dish(
        "Kimchi stew",
        CourseCategory.SOUP_OR_STEW,
        [("aged kimchi", "200", "g"), ("pork", "80", "g"), ("tofu", "100", "g")],
        "Stir-fry the kimchi with pork, add water and tofu and simmer.",
        NutritionFacts(calories=150, protein_g=12.0, carbs_g=8.0, fat_g=8.0, sodium_mg=900, fiber_g=2.0),
        meal_slots=_LUNCH_DINNER,
    ),
    _dish(
        "Soybean paste stew",
        CourseCategory.SOUP_OR_STEW,
        [("soybean paste", "2", "tbsp"), ("zucchini", "50", "g"), ("tofu", "100", "g")],
        "Simmer the paste in stock with zucchini, tofu and chili.",
        NutritionFacts(calories=100, protein_g=6.0, carbs_g=10.0, fat_g=3.5, sodium_mg=850, fiber_g=2.0),
        meal_slots=_LUNCH_DINNER,
    ),
    _dish(
        "Soft tofu stew",
        CourseCategory.SOUP_OR_STEW,
        [("soft tofu", "1", "pack"), ("egg", "1", "ea"), ("anchovy stock", "400", "ml")],
        "Simmer the soft tofu in spicy anchovy stock and finish with an egg.",
        NutritionFacts(calories=120, protein_g=10.0, carbs_g=6.0, fat_g=6.0, sodium_mg=550, fiber_g=1.0),
    ),
]

SNACK_FRUITS = [
    _fruit(
        STRAWBERRY_TITLE,
        "100",
        NutritionFacts(calories=32, protein_g=0.7, carbs_g=7.7, fat_g=0.3, fiber_g=2.0),
        frozenset({3, 4, 5}),
    ),
    _fruit(
        "Cherries",
        "100",
        NutritionFacts(calories=50, protein_g=1.0, carbs_g=12.2, fat_g=0.3, fiber_g=1.6),
        frozenset({5, 6}),
        frozenset({"diabetes"}),
    ),
    _fruit(
        "Watermelon",
        "100",
        NutritionFacts(calories=30, protein_g=0.6, carbs_g=7.6, fat_g=0.2, fiber_g=0.4),
        frozenset({6, 7, 8}),
        frozenset({"diabetes"}),
    ),
    _fruit(
        "Peach",
        "100",
        NutritionFacts(calories=39, protein_g=0.9, carbs_g=9.5, fat_g=0.3, fiber_g=1.5),
        frozenset({7, 8}),
    ),
    _fruit(
        "Melon",
        "100",
        NutritionFacts(calories=34, protein_g=0.8, carbs_g=8.2, fat_g=0.2, fiber_g=0.9),
        frozenset({6, 7, 8}),
        frozenset({"diabetes"}),
    ),
    _fruit(
        "Grapes",
        "100",
        NutritionFacts(calories=69, protein_g=0.7, carbs_g=18.1, fat_g=0.2, fiber_g=0.9),
        frozenset({8, 9, 10}),
        frozenset({"diabetes"}),
    ),
    _fruit(
        "Pear",
        "100",
        NutritionFacts(calories=57, protein_g=0.4, carbs_g=15.2, fat_g=0.1, fiber_g=3.1),
        frozenset({9, 10, 11}),
    ),
    _fruit(
        "Apple",
        "100",
        NutritionFacts(calories=52, protein_g=0.3, carbs_g=13.8, fat_g=0.2, fiber_g=2.4),
        frozenset({9, 10, 11, 12}),
    ),
    _fruit(
        "Persimmon",
        "100",
        NutritionFacts(calories=70, protein_g=0.6, carbs_g=18.6, fat_g=0.2, fiber_g=3.6),
        frozenset({10, 11}),
        frozenset({"diabetes"}),
    ),
    _fruit(
        "Kiwi",
        "100",
        NutritionFacts(calories=61, protein_g=1.1, carbs_g=14.7, fat_g=0.5, fiber_g=3.0),
        frozenset({1, 2, 11, 12}),
    ),
    _fruit(
        BANANA_TITLE,
        "120",
        NutritionFacts(calories=105, protein_g=1.3, carbs_g=27.0, fat_g=0.4, fiber_g=3.1),
        _YEAR_ROUND,
        frozenset({"diabetes"}),
    ),
]

FALLBACK_RECIPES: list[DishRecord] = [*STAPLES, *SIDES, *SOUPS_AND_STEWS, *SNACK_FRUITS]
