"""Application-side referential integrity.

SQLite is not trusted to cascade or to reject dangling references, so the
rules live here as two tables keyed by model:

* ``PARENTS``: (column, parent model) pairs that must resolve before a row
  of the model may be inserted.
* ``DEPENDENTS``: (dependent model, column) pairs whose rows are removed by
  the owning controller's ``delete_by_<column>`` before a row of the model
  is deleted.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Tuple, Type

from sqlmodel import Session, SQLModel

from ..models import (
    Ingredient,
    IngredientMacro,
    Meal,
    MealIngredient,
    Recipe,
    RecipeIngredient,
)
from .util import load_by_id


PARENTS: Dict[Type[SQLModel], Tuple[Tuple[str, Type[SQLModel]], ...]] = {
    IngredientMacro: (("ingredient_id", Ingredient),),
    MealIngredient: (("meal_id", Meal), ("ingredient_id", Ingredient)),
    RecipeIngredient: (("recipe_id", Recipe), ("ingredient_id", Ingredient)),
}

DEPENDENTS: Dict[Type[SQLModel], Tuple[Tuple[Type[SQLModel], str], ...]] = {
    Ingredient: (
        (IngredientMacro, "ingredient_id"),
        (MealIngredient, "ingredient_id"),
        (RecipeIngredient, "ingredient_id"),
    ),
    Meal: ((MealIngredient, "meal_id"),),
    Recipe: ((RecipeIngredient, "recipe_id"),),
}


def missing_parents(session: Session, model: Type[SQLModel], new_item: SQLModel) -> List[Tuple[str, int]]:
    """Return the (column, id) references of ``new_item`` that point nowhere.

    Store errors propagate to the caller.
    """
    missing: List[Tuple[str, int]] = []
    for column, parent in PARENTS.get(model, ()):
        parent_id = getattr(new_item, column)
        if load_by_id(session, parent, parent_id) is None:
            missing.append((column, parent_id))
    return missing


def cascade_primitive(dependent: Type[SQLModel], column: str) -> Callable[[Session, int], bool]:
    """Return the ``delete_by_<column>`` method of the controller owning ``dependent``."""
    # The controllers import this module, so they are resolved at call time.
    from . import ingredient_macros, meal_ingredients, recipe_ingredients

    owners = {c.model: c for c in (ingredient_macros, meal_ingredients, recipe_ingredients)}
    return getattr(owners[dependent], f"delete_by_{column}")


def cascade_delete(session: Session, model: Type[SQLModel], parent_id: int) -> bool:
    """Remove all dependents of the ``model`` row ``parent_id``.

    Every step runs even if an earlier one failed; the result is False if any did.
    """
    ok = True
    for dependent, column in DEPENDENTS.get(model, ()):
        if not cascade_primitive(dependent, column)(session, parent_id):
            ok = False
    return ok
