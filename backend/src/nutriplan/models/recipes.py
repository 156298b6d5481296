from typing import Optional
from sqlmodel import SQLModel, Field


class RecipeBase(SQLModel):
    name: str
    description: str = ""


class NewRecipe(RecipeBase):
    pass


class Recipe(RecipeBase, table=True):
    __tablename__ = "recipes"

    id: Optional[int] = Field(default=None, primary_key=True)


class RecipeIngredientBase(SQLModel):
    recipe_id: int = Field(foreign_key="recipes.id", index=True)
    ingredient_id: int = Field(foreign_key="ingredients.id", index=True)
    mass: int = 0  # grams


class NewRecipeIngredient(RecipeIngredientBase):
    pass


class RecipeIngredient(RecipeIngredientBase, table=True):
    __tablename__ = "recipe_ingredients"

    id: Optional[int] = Field(default=None, primary_key=True)
