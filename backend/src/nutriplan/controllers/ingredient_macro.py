from sqlmodel import Session, SQLModel

from ..models import IngredientMacro, NewIngredientMacro
from .base import CRUDController
from .util import bulk_delete


class IngredientMacroController(CRUDController[NewIngredientMacro, IngredientMacro]):
    model = IngredientMacro
    label = "ingredient macro"

    def delete_by_ingredient_id(self, session: Session, ingredient_id: int) -> bool:
        return bulk_delete(session, IngredientMacro, "ingredient_id", ingredient_id)

    def _apply(self, row: IngredientMacro, item: SQLModel) -> None:
        super()._apply(row, item)
        row.refresh_calories()


ingredient_macros = IngredientMacroController()
