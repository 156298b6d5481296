from .base import CRUDController
from .ingredient import IngredientController, ingredients
from .ingredient_macro import IngredientMacroController, ingredient_macros
from .meal import MealController, meals
from .meal_ingredient import MealIngredientController, meal_ingredients
from .recipe import RecipeController, recipes
from .recipe_ingredient import RecipeIngredientController, recipe_ingredients

__all__ = [
    "CRUDController",
    "IngredientController",
    "IngredientMacroController",
    "MealController",
    "MealIngredientController",
    "RecipeController",
    "RecipeIngredientController",
    "ingredient_macros",
    "ingredients",
    "meal_ingredients",
    "meals",
    "recipe_ingredients",
    "recipes",
]
