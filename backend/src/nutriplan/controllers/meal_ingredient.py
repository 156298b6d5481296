from sqlmodel import Session

from ..models import MealIngredient, NewMealIngredient
from .base import CRUDController
from .util import bulk_delete


class MealIngredientController(CRUDController[NewMealIngredient, MealIngredient]):
    model = MealIngredient
    label = "meal ingredient"

    def delete_by_ingredient_id(self, session: Session, ingredient_id: int) -> bool:
        return bulk_delete(session, MealIngredient, "ingredient_id", ingredient_id)

    def delete_by_meal_id(self, session: Session, meal_id: int) -> bool:
        return bulk_delete(session, MealIngredient, "meal_id", meal_id)


meal_ingredients = MealIngredientController()
