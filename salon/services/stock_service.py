"""Product stock helpers."""
from typing import List, Optional

from salon.models.resources import Product
from salon.services.resource_service import ResourceCollection


def adjust_stock(products: ResourceCollection, product_id: str, delta) -> Optional[Product]:
    """Add delta (negative to withdraw) to a product quantity, floored at 0."""
    product = products.get(product_id)
    if product is None:
        return None
    return products.update(product_id, quantity=max(0, product.quantity + delta))


def low_stock(products: List[Product]) -> List[Product]:
    """Products at or under their alert threshold."""
    return [p for p in products if p.quantity <= p.alert_threshold]


def stock_value(products: List[Product]):
    """Inventory value at purchase price."""
    return sum(p.purchase_price * p.quantity for p in products)


def categories(products: List[Product]) -> List[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in products))
