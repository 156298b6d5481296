from ..models import NewRecipe, Recipe
from .base import CRUDController


class RecipeController(CRUDController[NewRecipe, Recipe]):
    model = Recipe
    label = "recipe"


recipes = RecipeController()
