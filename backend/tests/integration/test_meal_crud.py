import datetime as dt

from sqlmodel import select

from nutriplan.controllers import meals
from nutriplan.models import Meal, MealIngredient, NewMeal


def test_create_returns_true_on_sane_parameters(pool, session):
    assert meals.create(session, NewMeal(name="Breakfast", date=dt.date(2024, 3, 1), time=dt.time(7, 30)))


def test_create_stores_date_and_time(pool, session):
    new = NewMeal(name="Dinner", date=dt.date(2024, 3, 1), time=dt.time(19, 15))
    item = meals.insert(session, new)
    stored = meals.read(session, item.id)
    assert stored.name == "Dinner"
    assert stored.date == dt.date(2024, 3, 1)
    assert stored.time == dt.time(19, 15)


def test_read_with_sane_id_returns_correct_item(seeded, session):
    item = meals.read(session, 2)
    assert (item.name, item.date, item.time) == ("meal2", dt.date(2024, 1, 2), dt.time(12, 30))


def test_update_with_sane_id_updates_as_expected(seeded, session):
    item = Meal(id=1, name="updated", date=dt.date(2024, 2, 2), time=dt.time(9, 45))
    assert meals.update(session, 1, item)
    stored = meals.read(session, 1)
    assert (stored.name, stored.date, stored.time) == ("updated", dt.date(2024, 2, 2), dt.time(9, 45))


def test_delete_with_sane_id_deletes_as_expected(seeded, session):
    assert meals.delete(session, 1)
    assert [m.id for m in session.exec(select(Meal)).all()] == [2]


def test_delete_also_removes_meal_ingredient_entry(seeded, session, row_count):
    assert meals.delete(session, 1)
    assert row_count(session, MealIngredient, meal_id=1) == 0
    assert row_count(session, MealIngredient, meal_id=2) == 1


def test_exists(seeded, session):
    assert meals.exists(session, 1)
    assert not meals.exists(session, 3)
