from ..models import Meal, NewMeal
from .base import CRUDController


class MealController(CRUDController[NewMeal, Meal]):
    model = Meal
    label = "meal"


meals = MealController()
