from . import admin, auth, cart, contact, live, orders, products, wishlist

all_routers = [
    products.router,
    auth.router,
    cart.router,
    wishlist.router,
    orders.router,
    contact.router,
    admin.router,
    live.router,
]

__all__ = ["all_routers"]
