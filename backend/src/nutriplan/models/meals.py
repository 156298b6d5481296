import datetime as dt
from typing import Optional
from sqlmodel import SQLModel, Field


class MealBase(SQLModel):
    name: str
    date: dt.date
    time: dt.time


class NewMeal(MealBase):
    pass


class Meal(MealBase, table=True):
    __tablename__ = "meals"

    id: Optional[int] = Field(default=None, primary_key=True)


class MealIngredientBase(SQLModel):
    meal_id: int = Field(foreign_key="meals.id", index=True)
    ingredient_id: int = Field(foreign_key="ingredients.id", index=True)
    mass: int = 0  # grams


class NewMealIngredient(MealIngredientBase):
    pass


class MealIngredient(MealIngredientBase, table=True):
    __tablename__ = "meal_ingredients"

    id: Optional[int] = Field(default=None, primary_key=True)
