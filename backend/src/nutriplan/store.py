from __future__ import annotations

import logging
from typing import Generic, Optional

from .controllers import (
    CRUDController,
    ingredient_macros,
    ingredients,
    meal_ingredients,
    meals,
    recipe_ingredients,
    recipes,
)
from .controllers.base import ItemT, NewT
from .core.config import Settings
from .core.database import ConnectionPool, create_schema, open_pool
from .models import (
    Ingredient,
    IngredientMacro,
    Meal,
    MealIngredient,
    NewIngredient,
    NewIngredientMacro,
    NewMeal,
    NewMealIngredient,
    NewRecipe,
    NewRecipeIngredient,
    Recipe,
    RecipeIngredient,
)


logger = logging.getLogger(__name__)


class EntityStore(Generic[NewT, ItemT]):
    """One entity's CRUD operations, each leasing its own pooled connection."""

    def __init__(self, pool: ConnectionPool, controller: CRUDController[NewT, ItemT]) -> None:
        self.pool = pool
        self.controller = controller

    def create(self, new_item: NewT) -> bool:
        with self.pool.lease() as session:
            return self.controller.create(session, new_item)

    def insert(self, new_item: NewT) -> Optional[ItemT]:
        with self.pool.lease() as session:
            return self.controller.insert(session, new_item)

    def read(self, item_id: int) -> Optional[ItemT]:
        with self.pool.lease() as session:
            return self.controller.read(session, item_id)

    def update(self, item: ItemT) -> bool:
        item_id = getattr(item, "id", None)
        if item_id is None:
            logger.error("Could not update %s without an id", self.controller.label)
            return False
        with self.pool.lease() as session:
            return self.controller.update(session, item_id, item)

    def delete(self, item_id: int) -> bool:
        with self.pool.lease() as session:
            return self.controller.delete(session, item_id)

    def exists(self, item_id: int) -> bool:
        with self.pool.lease() as session:
            return self.controller.exists(session, item_id)


class NutriplanStore:
    """Entry point bundling a connection pool with one store per entity."""

    def __init__(
        self,
        location: Optional[str] = None,
        pool: Optional[ConnectionPool] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.pool = pool or open_pool(location, settings)

        self.ingredients: EntityStore[NewIngredient, Ingredient] = EntityStore(self.pool, ingredients)
        self.ingredient_macros: EntityStore[NewIngredientMacro, IngredientMacro] = EntityStore(
            self.pool, ingredient_macros
        )
        self.meals: EntityStore[NewMeal, Meal] = EntityStore(self.pool, meals)
        self.meal_ingredients: EntityStore[NewMealIngredient, MealIngredient] = EntityStore(
            self.pool, meal_ingredients
        )
        self.recipes: EntityStore[NewRecipe, Recipe] = EntityStore(self.pool, recipes)
        self.recipe_ingredients: EntityStore[NewRecipeIngredient, RecipeIngredient] = EntityStore(
            self.pool, recipe_ingredients
        )

    def create_schema(self) -> None:
        create_schema(self.pool)

    def close(self) -> None:
        self.pool.dispose()

    def __enter__(self) -> "NutriplanStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
