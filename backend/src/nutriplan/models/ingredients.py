from typing import Any, Dict, Optional
from pydantic import model_validator
from sqlmodel import SQLModel, Field

from ..utils.nutrition import macro_calories


MACRO_FIELDS = ("proteins", "carbs", "fats", "alcohols")


class IngredientBase(SQLModel):
    name: str


class NewIngredient(IngredientBase):
    pass


class Ingredient(IngredientBase, table=True):
    __tablename__ = "ingredients"

    id: Optional[int] = Field(default=None, primary_key=True)


class IngredientMacroBase(SQLModel):
    ingredient_id: int = Field(foreign_key="ingredients.id", index=True)
    proteins: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    alcohols: float = 0.0
    # Derived from the four macros, never taken from the caller.
    calories: float = 0.0

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        # model_validate() runs __init__ without data before the fields exist
        if data:
            self.refresh_calories()

    @model_validator(mode="before")
    @classmethod
    def _derive_calories(cls, data: Any) -> Any:
        # Table models skip validation in __init__, so this covers model_validate()
        if not isinstance(data, dict):
            data = {name: getattr(data, name) for name in cls.model_fields if hasattr(data, name)}
        try:
            calories = macro_calories(*(data.get(name) for name in MACRO_FIELDS))
        except (TypeError, ValueError):
            # leave it to field validation to report the bad macro
            return data
        return {**data, "calories": calories}

    def model_copy(self, *, update: Optional[Dict[str, Any]] = None, deep: bool = False):
        copied = super().model_copy(update=update, deep=deep)
        copied.refresh_calories()
        return copied

    def refresh_calories(self) -> float:
        self.calories = macro_calories(self.proteins, self.carbs, self.fats, self.alcohols)
        return self.calories


class NewIngredientMacro(IngredientMacroBase):
    pass


class IngredientMacro(IngredientMacroBase, table=True):
    __tablename__ = "ingredient_macros"

    id: Optional[int] = Field(default=None, primary_key=True)
