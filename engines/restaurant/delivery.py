"""
Bistro Restaurant Engine - Delivery Glue
==========================================
Hands a prepared recipe to an external delivery service.
Failures of the service propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger("bistro.delivery")


class DeliveryService(Protocol):
    def deliver(self, recipe: Any, address: str, instructions: Optional[str]) -> Any:
        ...  # pragma: no cover


def order_delivery(
    recipe: Any,
    address: str,
    instructions: Optional[str],
    delivery_service: Optional[DeliveryService],
) -> Any:
    """Validate the request and return the delivery service's result."""
    if not recipe or not address:
        raise ValueError("Plat et adresse requis")
    if delivery_service is None:
        raise ValueError("Service de livraison requis")
    logger.info(f"Delivery requested to {address}")
    return delivery_service.deliver(recipe, address, instructions)
