from .ingredients import Ingredient, IngredientMacro, NewIngredient, NewIngredientMacro
from .meals import Meal, MealIngredient, NewMeal, NewMealIngredient
from .recipes import NewRecipe, NewRecipeIngredient, Recipe, RecipeIngredient

__all__ = [
    "Ingredient",
    "IngredientMacro",
    "Meal",
    "MealIngredient",
    "NewIngredient",
    "NewIngredientMacro",
    "NewMeal",
    "NewMealIngredient",
    "NewRecipe",
    "NewRecipeIngredient",
    "Recipe",
    "RecipeIngredient",
]
