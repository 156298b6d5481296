from __future__ import annotations

from typing import Optional


# Flat energy factor applied to every macro gram, alcohol included.
KCAL_PER_GRAM = 4.0


def macro_calories(
    proteins: Optional[float],
    carbs: Optional[float],
    fats: Optional[float],
    alcohols: Optional[float],
) -> float:
    """Derive the calories of a macro record.

    - Treat None as 0.0
    """

    def f(x: Optional[float]) -> float:
        return float(x or 0.0)

    return KCAL_PER_GRAM * (f(proteins) + f(carbs) + f(fats) + f(alcohols))
