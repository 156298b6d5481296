import threading
from datetime import date, time
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import func
from sqlmodel import Session, select

from nutriplan.core.config import Settings, get_settings
from nutriplan.core.database import ConnectionPool, create_schema, open_pool
from nutriplan.models import (
    Ingredient,
    IngredientMacro,
    Meal,
    MealIngredient,
    Recipe,
    RecipeIngredient,
)
from nutriplan.store import NutriplanStore


@pytest.fixture(scope="session")
def store_lock() -> threading.Lock:
    # Store-backed tests never overlap, even under a threaded runner.
    return threading.Lock()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def pool(db_path: Path, store_lock: threading.Lock) -> Iterator[ConnectionPool]:
    with store_lock:
        db_pool = open_pool(str(db_path), settings=Settings())
        create_schema(db_pool)
        try:
            yield db_pool
        finally:
            db_pool.dispose()


@pytest.fixture
def session(pool: ConnectionPool) -> Iterator[Session]:
    with pool.lease() as s:
        yield s


@pytest.fixture
def store(pool: ConnectionPool) -> NutriplanStore:
    return NutriplanStore(pool=pool)


@pytest.fixture
def seeded(pool: ConnectionPool) -> ConnectionPool:
    """Two rows per table; rows with id 1 reference parents with id 1, likewise for 2."""
    with pool.lease() as s:
        s.add_all([Ingredient(id=1, name="test1"), Ingredient(id=2, name="test2")])
        s.add_all([
            Meal(id=1, name="meal1", date=date(2024, 1, 1), time=time(8, 0)),
            Meal(id=2, name="meal2", date=date(2024, 1, 2), time=time(12, 30)),
        ])
        s.add_all([
            Recipe(id=1, name="recipe1", description="description1"),
            Recipe(id=2, name="recipe2", description="description2"),
        ])
        s.commit()
        s.add_all([
            IngredientMacro(id=1, ingredient_id=1, proteins=1.0, carbs=1.0, fats=1.0, alcohols=1.0),
            IngredientMacro(id=2, ingredient_id=2, proteins=2.0, carbs=2.0, fats=2.0, alcohols=2.0),
            MealIngredient(id=1, meal_id=1, ingredient_id=1, mass=111),
            MealIngredient(id=2, meal_id=2, ingredient_id=2, mass=222),
            RecipeIngredient(id=1, recipe_id=1, ingredient_id=1, mass=111),
            RecipeIngredient(id=2, recipe_id=2, ingredient_id=2, mass=222),
        ])
        s.commit()
    return pool


@pytest.fixture
def row_count():
    def _count(session: Session, model, **filters) -> int:
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        return session.exec(stmt).one()

    return _count
