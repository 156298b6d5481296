# -*- coding: utf-8 -*-
"""
Command line front end for the nutriplan store.

Usage:
    nutriplan-db <entity> <op> [fields...]
    nutriplan-db ingredient create Oats
    nutriplan-db meal create Breakfast 2024-03-01 07:30
    nutriplan-db ingredient_macro read 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from sqlmodel import SQLModel

from .core.config import get_settings
from .core.database import PoolError
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
from .store import EntityStore, NutriplanStore


OPS = ("create", "read", "update", "delete", "help")


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time(value: str) -> time:
    return datetime.strptime(value, "%H:%M").time()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    parse: Callable[[str], Any]
    hint: str


@dataclass(frozen=True)
class EntitySpec:
    label: str
    store_attr: str
    new_model: Type[SQLModel]
    model: Type[SQLModel]
    fields: Tuple[FieldSpec, ...]

    def signature(self, op: str) -> Tuple[FieldSpec, ...]:
        if op == "create":
            return self.fields
        if op == "update":
            return (ID_FIELD,) + self.fields
        return (ID_FIELD,)


ID_FIELD = FieldSpec("id", int, "integer")

ENTITIES: Dict[str, EntitySpec] = {
    "ingredient": EntitySpec(
        "ingredient", "ingredients", NewIngredient, Ingredient,
        (FieldSpec("name", str, "text"),),
    ),
    "ingredient_macro": EntitySpec(
        "ingredient macro", "ingredient_macros", NewIngredientMacro, IngredientMacro,
        (
            FieldSpec("ingredient_id", int, "integer"),
            FieldSpec("proteins", float, "grams"),
            FieldSpec("carbs", float, "grams"),
            FieldSpec("fats", float, "grams"),
            FieldSpec("alcohols", float, "grams"),
        ),
    ),
    "meal": EntitySpec(
        "meal", "meals", NewMeal, Meal,
        (
            FieldSpec("name", str, "text"),
            FieldSpec("date", parse_date, "YYYY-MM-DD"),
            FieldSpec("time", parse_time, "HH:MM"),
        ),
    ),
    "meal_ingredient": EntitySpec(
        "meal ingredient", "meal_ingredients", NewMealIngredient, MealIngredient,
        (
            FieldSpec("meal_id", int, "integer"),
            FieldSpec("ingredient_id", int, "integer"),
            FieldSpec("mass", int, "grams"),
        ),
    ),
    "recipe": EntitySpec(
        "recipe", "recipes", NewRecipe, Recipe,
        (
            FieldSpec("name", str, "text"),
            FieldSpec("description", str, "text"),
        ),
    ),
    "recipe_ingredient": EntitySpec(
        "recipe ingredient", "recipe_ingredients", NewRecipeIngredient, RecipeIngredient,
        (
            FieldSpec("recipe_id", int, "integer"),
            FieldSpec("ingredient_id", int, "integer"),
            FieldSpec("mass", int, "grams"),
        ),
    ),
}


def usage(prog: str = "nutriplan-db") -> None:
    print(f"Usage: {prog} <cmd> <subcmd> [fields...]")
    print("Where cmd holds the table to work on:")
    print("\t* ingredient\t* ingredient_macro")
    print("\t* meal\t\t* meal_ingredient")
    print("\t* recipe\t* recipe_ingredient")
    print("\t* help")
    print("And subcmd is one of")
    print("\t* create\t* read")
    print("\t* update\t* delete")
    print("For each cmd a help subcmd is available, which lists the expected fields.")


def entity_help(name: str, spec: EntitySpec, prog: str = "nutriplan-db") -> None:
    for op in OPS[:-1]:
        fields = " ".join(f"<{f.name}:{f.hint}>" for f in spec.signature(op))
        print(f"{prog} {name} {op} {fields}")


def decode_fields(spec: EntitySpec, op: str, raw: Sequence[str]) -> Dict[str, Any]:
    """Convert positional arguments into typed values. Raises ValueError."""
    signature = spec.signature(op)
    if len(raw) != len(signature):
        raise ValueError(f"{op} expects {len(signature)} field(s), got {len(raw)}")
    values: Dict[str, Any] = {}
    for field, value in zip(signature, raw):
        try:
            values[field.name] = field.parse(value)
        except ValueError as exc:
            raise ValueError(f"Could not parse {field.name} ({field.hint}) from {value!r}: {exc}") from exc
    return values


def print_result(ok: bool) -> None:
    print("Success" if ok else "Failure")


def print_item(spec: EntitySpec, item_id: int, item: Optional[SQLModel]) -> None:
    if item is None:
        print(f"No {spec.label} with id {item_id} found")
        return
    print(f"Found {spec.label} with id {item_id}")
    for key, value in item.model_dump(exclude={"id"}).items():
        print(f"\t{key}: {value}")


def run(entity_store: EntityStore, spec: EntitySpec, op: str, values: Dict[str, Any]) -> None:
    if op == "create":
        print_result(entity_store.create(spec.new_model(**values)))
    elif op == "read":
        print_item(spec, values["id"], entity_store.read(values["id"]))
    elif op == "update":
        print_result(entity_store.update(spec.model(**values)))
    elif op == "delete":
        print_result(entity_store.delete(values["id"]))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutriplan-db",
        description="Nutriplan database CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db",
        help="SQLite file or sqlite:// URL (default: DATABASE_URL)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: LOG_LEVEL or WARNING)",
    )
    parser.add_argument("entity", nargs="?")
    parser.add_argument("op", nargs="?")
    # REMAINDER keeps text fields such as "-spicy" from being read as options
    parser.add_argument("fields", nargs=argparse.REMAINDER)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.entity == "help":
        usage()
        return 0
    spec = ENTITIES.get(args.entity or "")
    if spec is None or args.op not in OPS:
        usage()
        return 1
    if args.op == "help":
        entity_help(args.entity, spec)
        return 0

    try:
        values = decode_fields(spec, args.op, args.fields)
    except ValueError as exc:
        print(f"Error: {exc}")
        entity_help(args.entity, spec)
        return 1

    try:
        store = NutriplanStore(args.db, settings=settings)
    except PoolError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        store.create_schema()
        run(getattr(store, spec.store_attr), spec, args.op, values)
    except PoolError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
