from .ratings import add_rating
from .checkout import place_order, checkout_cart

__all__ = ["add_rating", "place_order", "checkout_cart"]
