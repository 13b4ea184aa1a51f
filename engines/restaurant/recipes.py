"""
Bistro Restaurant Engine - Recipes
====================================
A recipe is an immutable, ordered list of (ingredient, quantity)
requirements. Recipes are looked up by name in a RecipeBook.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from engines.inventory.ledger import Quantity, to_decimal
from engines.restaurant.errors import InvalidRecipe, UnsupportedRecipe


# ══════════════════════════════════════════════════════════════
# RECIPE REQUIREMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IngredientRequirement:
    ingredient_name: str
    quantity: Decimal


@dataclass(frozen=True)
class RecipeRequirement:
    """
    Ingredients needed to prepare one instance of a recipe.

    Order of `ingredients` is the order used for validation and
    consumption during fulfillment.
    """
    name: str
    ingredients: Tuple[IngredientRequirement, ...]
    preparation_minutes: int
    display_name: str = ""

    @classmethod
    def build(
        cls,
        name: str,
        ingredients: Iterable[Tuple[str, Quantity]],
        *,
        preparation_minutes: int,
        display_name: str = "",
    ) -> "RecipeRequirement":
        return cls(
            name=name,
            ingredients=tuple(
                IngredientRequirement(ingredient, to_decimal(qty))
                for ingredient, qty in ingredients
            ),
            display_name=display_name or name,
            preparation_minutes=preparation_minutes,
        )

    @property
    def ready_message(self) -> str:
        return f"{self.display_name or self.name} prête !"


MARGHERITA = RecipeRequirement.build(
    "margherita",
    [
        ("pate_pizza", 1),
        ("tomates", "0.2"),
        ("mozzarella", "0.15"),
        ("basilic", 1),
        ("huile_olive", "0.05"),
    ],
    display_name="Pizza Margherita",
    preparation_minutes=15,
)


# ══════════════════════════════════════════════════════════════
# RECIPE BOOK
# ══════════════════════════════════════════════════════════════

class RecipeBook:
    """Name → RecipeRequirement registry."""

    def __init__(self, recipes: Iterable[RecipeRequirement] = ()) -> None:
        self._recipes: Dict[str, RecipeRequirement] = {}
        for recipe in recipes:
            self.register(recipe)

    def register(self, recipe: RecipeRequirement) -> None:
        validate_recipe(recipe)
        self._recipes[recipe.name] = recipe

    def find(self, name: str) -> Optional[RecipeRequirement]:
        return self._recipes.get(name)

    def get(self, name: str) -> RecipeRequirement:
        recipe = self._recipes.get(name)
        if recipe is None:
            raise UnsupportedRecipe(name)
        return recipe

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._recipes))

    def __contains__(self, name: object) -> bool:
        return name in self._recipes


def default_recipe_book() -> RecipeBook:
    return RecipeBook([MARGHERITA])


# ══════════════════════════════════════════════════════════════
# RECIPE VALIDATION
# ══════════════════════════════════════════════════════════════

DIFFICULTY_EASY = "easy"
DIFFICULTY_MEDIUM = "medium"
DIFFICULTY_HARD = "hard"


@dataclass(frozen=True)
class RecipeValidation:
    name: str
    ingredient_count: int
    preparation_minutes: int
    difficulty: str


def _difficulty(ingredient_count: int) -> str:
    if ingredient_count > 10:
        return DIFFICULTY_HARD
    if ingredient_count > 5:
        return DIFFICULTY_MEDIUM
    return DIFFICULTY_EASY


def validate_recipe(recipe: RecipeRequirement) -> RecipeValidation:
    """
    Check that a recipe definition is usable.

    Raises InvalidRecipe for an empty name, no ingredients, a
    non-positive ingredient quantity or a non-positive preparation time.
    """
    if not recipe.name or not isinstance(recipe.name, str):
        raise InvalidRecipe("Le nom de la recette est obligatoire")
    if not recipe.ingredients:
        raise InvalidRecipe("La recette doit contenir au moins un ingrédient")
    for requirement in recipe.ingredients:
        if requirement.quantity <= 0:
            raise InvalidRecipe(
                f"Quantité invalide pour {requirement.ingredient_name}: "
                f"{requirement.quantity}"
            )
    if recipe.preparation_minutes <= 0:
        raise InvalidRecipe("Le temps de préparation doit être supérieur à 0")

    return RecipeValidation(
        name=recipe.name,
        ingredient_count=len(recipe.ingredients),
        preparation_minutes=recipe.preparation_minutes,
        difficulty=_difficulty(len(recipe.ingredients)),
    )
