import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from besart.order_types import ProductNotFoundError
from besart.product_repository import ProductRepository
from besart.product_types import FindProductByIdOutput, GetProductInput


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )

    @event.listens_for(eng, "connect")
    def _attach(dbapi_conn, _record):
        dbapi_conn.execute("ATTACH DATABASE ':memory:' AS public")

    with eng.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE public.products (id TEXT PRIMARY KEY, name TEXT, image TEXT, "
                "description TEXT, dimension TEXT, medium TEXT, original_price INTEGER, "
                "discounted_price INTEGER, rating REAL)"
            )
        )
    yield eng
    eng.dispose()


def _insert(engine, **row):
    base = {
        "id": "p1",
        "name": "Sunset",
        "image": "sunset.png",
        "description": "oil on canvas",
        "dimension": "40x60",
        "medium": "oil",
        "original_price": 500,
        "discounted_price": 450,
        "rating": 4,
    }
    base.update(row)
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO public.products VALUES (:id, :name, :image, :description, "
                ":dimension, :medium, :original_price, :discounted_price, :rating)"
            ),
            base,
        )


def test_get_products_returns_all_rows(engine):
    _insert(engine, id="p1")
    _insert(engine, id="p2", discounted_price=None, rating=None)
    repo = ProductRepository(engine)

    items = {item.id: item for item in repo.get_products(GetProductInput(page=1, page_size=10))}

    assert set(items) == {"p1", "p2"}
    assert items["p1"].discounted_price == 450
    assert items["p1"].rating == 4.0
    assert items["p2"].discounted_price is None
    assert items["p2"].rating is None
    assert items["p2"].original_price == 500


def test_get_products_ignores_paging(engine):
    for n in range(3):
        _insert(engine, id=f"p{n}")
    repo = ProductRepository(engine)

    items = repo.get_products(GetProductInput(page=2, page_size=1))

    assert len(items) == 3


def test_get_products_empty_table(engine):
    assert ProductRepository(engine).get_products(GetProductInput(page=1, page_size=10)) == []


def test_get_products_unreadable_row_gives_empty_list(engine):
    _insert(engine, id="p1")
    _insert(engine, id="p2", name=None)

    assert ProductRepository(engine).get_products(GetProductInput(page=1, page_size=10)) == []


def test_find_product_by_id(engine):
    _insert(engine, id="p1")
    repo = ProductRepository(engine)

    product = repo.find_product_by_id("p1")

    assert product == FindProductByIdOutput(
        description="oil on canvas",
        dimension="40x60",
        discounted_price=450,
        id="p1",
        image="sunset.png",
        medium="oil",
        name="Sunset",
        original_price=500,
        rating=4,
    )


def test_find_product_by_id_missing(engine):
    with pytest.raises(ProductNotFoundError):
        ProductRepository(engine).find_product_by_id("nope")


def test_find_product_by_id_null_column(engine):
    _insert(engine, id="p1", discounted_price=None)
    with pytest.raises(ValueError):
        ProductRepository(engine).find_product_by_id("p1")