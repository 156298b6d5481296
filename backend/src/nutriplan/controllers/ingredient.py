from ..models import Ingredient, NewIngredient
from .base import CRUDController


class IngredientController(CRUDController[NewIngredient, Ingredient]):
    """Deleting an ingredient also drops its macros and its meal/recipe entries."""

    model = Ingredient
    label = "ingredient"


ingredients = IngredientController()
