from sqlmodel import Session

from ..models import NewRecipeIngredient, RecipeIngredient
from .base import CRUDController
from .util import bulk_delete


class RecipeIngredientController(CRUDController[NewRecipeIngredient, RecipeIngredient]):
    model = RecipeIngredient
    label = "recipe ingredient"

    def delete_by_ingredient_id(self, session: Session, ingredient_id: int) -> bool:
        return bulk_delete(session, RecipeIngredient, "ingredient_id", ingredient_id)

    def delete_by_recipe_id(self, session: Session, recipe_id: int) -> bool:
        return bulk_delete(session, RecipeIngredient, "recipe_id", recipe_id)


recipe_ingredients = RecipeIngredientController()
