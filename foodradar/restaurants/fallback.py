from __future__ import annotations

from .models import RestaurantRecord
from .parser import maps_search_url

# (name, cuisine, description)
_DEMO_ROWS: tuple[tuple[str, str, str], ...] = (
    (
        "Burger & Co.",
        "American",
        "Juicy handmade smash burgers with secret sauce and crispy truffle fries.",
    ),
    (
        "Sushi Zen",
        "Japanese",
        "Fresh sashimi, artisan rolls, and warm miso soup in a peaceful setting.",
    ),
    (
        "Pasta Paradise",
        "Italian",
        "Authentic homemade pasta and wood-fired neapolitan pizzas.",
    ),
    (
        "Taco Fiesta",
        "Mexican",
        "Street-style tacos with spicy salsa verde and fresh guacamole.",
    ),
    (
        "Golden Dragon",
        "Chinese",
        "Classic dim sum favorites and spicy Szechuan dishes.",
    ),
)

DEMO_RESTAURANTS: tuple[RestaurantRecord, ...] = tuple(
    RestaurantRecord(
        id=f"demo-{i}",
        name=name,
        cuisine=cuisine,
        description=description,
        map_uri=maps_search_url(name),
    )
    for i, (name, cuisine, description) in enumerate(_DEMO_ROWS, start=1)
)


def demo_restaurants() -> list[RestaurantRecord]:
    """Return a fresh list of the canned restaurants used in demo mode."""
    return list(DEMO_RESTAURANTS)
