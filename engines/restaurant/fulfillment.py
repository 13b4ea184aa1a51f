"""
Bistro Restaurant Engine - Recipe Fulfillment
===============================================
Two-phase, all-or-nothing consumption of a recipe's ingredients.

1. Validation: every requirement is checked; the first shortfall
   raises MissingIngredient and nothing is consumed.
2. Consumption: every requirement is consumed. A refusal here raises
   ConsumptionRace; ingredients already consumed by this call stay
   consumed (no compensation).

Both phases run under the ledger lock.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from engines.inventory.ledger import InventoryLedger
from engines.restaurant.errors import ConsumptionRace, MissingIngredient
from engines.restaurant.recipes import RecipeBook, RecipeRequirement, default_recipe_book

logger = logging.getLogger("bistro.fulfillment")

_DEFAULT_BOOK = default_recipe_book()


def fulfill(requirement: RecipeRequirement, ledger: InventoryLedger) -> str:
    """Prepare one instance of `requirement`. Returns the ready message."""
    with ledger.locked():
        for req in requirement.ingredients:
            if not ledger.check_available(req.ingredient_name, req.quantity):
                logger.info(
                    f"Recipe {requirement.name} rejected: "
                    f"{req.ingredient_name} short of {req.quantity}"
                )
                raise MissingIngredient(req.ingredient_name)

        consumed: List[str] = []
        for req in requirement.ingredients:
            if not ledger.consume(req.ingredient_name, req.quantity):
                logger.error(
                    f"Recipe {requirement.name}: consume of {req.ingredient_name} "
                    f"failed after validation; already consumed {consumed}"
                )
                raise ConsumptionRace(req.ingredient_name, tuple(consumed))
            consumed.append(req.ingredient_name)

    logger.info(f"Recipe {requirement.name} fulfilled")
    return requirement.ready_message


def fulfill_by_name(
    recipe_name: str,
    ledger: InventoryLedger,
    recipe_book: Optional[RecipeBook] = None,
) -> str:
    """Look up a recipe and fulfill it. Unknown names raise UnsupportedRecipe."""
    book = recipe_book if recipe_book is not None else _DEFAULT_BOOK
    return fulfill(book.get(recipe_name), ledger)
