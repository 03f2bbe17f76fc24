from typing import Iterable

from app.domain.models.product import Product

SYSTEM_PROMPT = "You are a product recommendation system. Answer with product IDs only."

def _one_line(text: str, limit: int = 200) -> str:
    # Catalog lines are pipe-separated; keep each product on a single line
    s = " ".join((text or "").split()).replace("|", "/")
    return s[:limit]

def recommendation_prompt(interacted: Iterable[Product], catalog: Iterable[Product], limit: int) -> str:
    """
    User prompt: products the user ordered/wishlisted, then the whole catalog
    as `id|name|description|category` lines.
    """
    history = "\n".join(
        f"- {p.name}: {_one_line(p.description)} (Category: {p.category})" for p in interacted
    )
    lines = "\n".join(
        f"{p.product_id}|{_one_line(p.name, 120)}|{_one_line(p.description)}|{p.category}" for p in catalog
    )
    return (
        "Based on the user's interaction with these products:\n"
        f"{history}\n\n"
        "From this available product catalog:\n"
        f"{lines}\n\n"
        f"Please recommend {limit} product IDs that would be most relevant to this user. Consider:\n"
        "1. Similar categories\n"
        "2. Complementary products\n"
        "3. Similar price ranges\n"
        "4. Product descriptions\n\n"
        "Return only the product IDs separated by commas, nothing else."
    )
