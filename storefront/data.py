"""Static storefront data."""

from __future__ import annotations

from storefront.models import Size

SIZES: tuple[Size, ...] = (Size.SMALL, Size.MEDIUM, Size.LARGE)

# Key pressed in the menu pane -> size added to the cart.
SIZE_BY_KEY: dict[str, Size] = {str(idx + 1): size for idx, size in enumerate(SIZES)}

SAMPLE_PIZZAS: list[dict[str, object]] = [
    {
        "name": "Margherita",
        "description": "Tomato, mozzarella, fresh basil",
        "price": 10.99,
        "vegetarian": True,
        "spicy": False,
        "image_url": "https://images.unsplash.com/photo-1544989164-31dc3c645987?q=80&w=800&auto=format&fit=crop",
    },
    {
        "name": "Pepperoni",
        "description": "Pepperoni, mozzarella, tomato sauce",
        "price": 12.49,
        "vegetarian": False,
        "spicy": False,
        "image_url": "https://images.unsplash.com/photo-1548365328-9f547fb0957d?q=80&w=800&auto=format&fit=crop",
    },
    {
        "name": "Diavola",
        "description": "Spicy salami, chili, tomato, mozzarella",
        "price": 13.99,
        "vegetarian": False,
        "spicy": True,
        "image_url": "https://images.unsplash.com/photo-1600628421055-4d9d88b91a43?q=80&w=800&auto=format&fit=crop",
    },
]
