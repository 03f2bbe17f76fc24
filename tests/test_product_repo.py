"""ProductRepo over an in-memory stand-in for a Motor collection."""
import pytest

from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import MSG_POPULAR
from app.domain.services.recommendation_svc import RecommendationResolver
from tests.fakes import FakeOrderRepo, FakeRanker, FakeWishlistRepo


class _Cursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, keys):
        return self

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for doc in self.docs:
            yield dict(doc)


class _Collection:
    def __init__(self, docs):
        self.docs = docs

    def find(self, query, projection=None):
        def matches(doc):
            for field, cond in query.items():
                if isinstance(cond, dict) and "$in" in cond:
                    if doc.get(field) not in cond["$in"]:
                        return False
                elif doc.get(field) != cond:
                    return False
            return True
        return _Cursor([d for d in self.docs if matches(d)])


DOCS = [
    {"product_id": "p1", "name": "Wireless Headphones", "description": "Over-ear", "price": 179.99, "category": "Electronics"},
    {"product_id": "p2", "name": "Bluetooth Speaker", "description": None, "price": 59.0, "category": None},
    {"product_id": "p3", "name": "Broken", "price": "not a price"},
]


@pytest.fixture
def repo():
    return ProductRepo({"products": _Collection(DOCS)})


@pytest.mark.asyncio
async def test_null_fields_are_read_as_empty(repo):
    products = await repo.list_all()

    p2 = next(p for p in products if p.product_id == "p2")
    assert p2.description == ""
    assert p2.category == ""


@pytest.mark.asyncio
async def test_invalid_document_does_not_hide_the_rest(repo):
    assert [p.product_id for p in await repo.list_all()] == ["p1", "p2"]
    assert [p.product_id for p in await repo.get_many_by_product_ids(["p2", "p3"])] == ["p2"]


@pytest.mark.asyncio
async def test_resolver_serves_catalog_despite_bad_document(repo):
    resolver = RecommendationResolver(
        products=repo,
        orders=FakeOrderRepo(),
        wishlist=FakeWishlistRepo(),
        ranker=FakeRanker(ids=["p1"]),
    )

    result = await resolver.resolve("u1")

    assert result.is_demo_mode is False
    assert result.message == MSG_POPULAR
    assert [p.product_id for p in result.recommendations] == ["p1", "p2"]
