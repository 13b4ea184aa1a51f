"""
Bistro Restaurant Engine - Errors
===================================
Fulfillment errors describe why one recipe could not be prepared.
The order service records them per item; they never escape
place_order().
"""


class FulfillmentError(Exception):
    """Base error for recipe fulfillment."""
    pass


class MissingIngredient(FulfillmentError):
    """An ingredient is absent or short; nothing was consumed."""

    def __init__(self, ingredient: str):
        self.ingredient = ingredient
        super().__init__(f"Ingrédient manquant : {ingredient}")


class UnsupportedRecipe(FulfillmentError):
    """No recipe is registered under this name."""

    def __init__(self, recipe_name: str):
        self.recipe_name = recipe_name
        super().__init__(f"Recette non supportée : {recipe_name}")


class ConsumptionRace(FulfillmentError):
    """
    Consumption failed after validation passed.

    Ingredients consumed earlier in the same fulfillment are NOT
    restored; they are listed in already_consumed.
    """

    def __init__(self, ingredient: str, already_consumed: tuple = ()):
        self.ingredient = ingredient
        self.already_consumed = already_consumed
        super().__init__(f"Impossible d'utiliser l'ingrédient : {ingredient}")


class OrderError(Exception):
    """Base error for batch-level order failures."""
    pass


class MalformedOrder(OrderError):
    """The submitted batch does not have the expected shape."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Commande invalide : {detail}")


class InvalidRecipe(ValueError):
    """A recipe definition fails structural validation."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
