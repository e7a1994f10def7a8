import pytest

from core.cart import CartStore
from core.models import CatalogItem


@pytest.fixture
def shirt():
    return CatalogItem(
        id=1,
        title="Mens Casual Premium Slim Fit T-Shirts",
        category="men's clothing",
        price=50.0,
        image="https://example.com/shirt.jpg",
        description="Slim-fitting style.",
    )


@pytest.fixture
def monitor():
    return CatalogItem(
        id=14,
        title="Samsung 49-Inch Curved Gaming Monitor",
        category="electronics",
        price=999.99,
        image="https://example.com/monitor.jpg",
    )


@pytest.fixture
def ring():
    return CatalogItem(id=5, title="Solid Gold Petite Micropave", category="jewelery", price=168.0)


@pytest.fixture
def backpack():
    return CatalogItem(id=7, title="Fjallraven Foldsack No. 1 Backpack", category="bags", price=109.95)


@pytest.fixture
def catalog(shirt, monitor, ring, backpack):
    return [shirt, monitor, ring, backpack]


@pytest.fixture
def cart():
    return CartStore()


class FakeGateway:
    """Stands in for a catalog gateway module; `products=None` means no data."""

    def __init__(self, products=None):
        self.products = products
        self.list_calls = 0

    def list_products(self):
        self.list_calls += 1
        return None if self.products is None else list(self.products)

    def get_product(self, item_id):
        for p in self.products or []:
            if p.id == item_id:
                return p
        return None


@pytest.fixture
def gateway(catalog):
    return FakeGateway(catalog)


@pytest.fixture
def offline_gateway():
    return FakeGateway(None)
