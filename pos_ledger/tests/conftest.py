import pytest
from fastapi.testclient import TestClient

from pos_ledger.core.database import build_engine, build_session_factory, get_db, get_engine
from pos_ledger.core.money import MoneyNormalizer
from pos_ledger.core.schema import ensure_schema


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'products.sqlite'}"


@pytest.fixture
def engine(db_url):
    engine = build_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def migrated_engine(engine):
    ensure_schema(engine)
    return engine


@pytest.fixture
def session_factory(migrated_engine):
    return build_session_factory(migrated_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def normalizer():
    return MoneyNormalizer()


@pytest.fixture
def client(migrated_engine, session_factory):
    from pos_ledger.main import create_app

    app = create_app(run_init_db=False)

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_engine] = lambda: migrated_engine
    return TestClient(app)


@pytest.fixture
def make_payload():
    def _make(**overrides):
        payload = {
            "invoice_number": "INV-1",
            "cashier_name": "Linh",
            "subtotal": 100,
            "tax": 10,
            "total": 110,
            "discount": 0,
            "paid_cash": 200,
            "change_due": 90,
            "items": [{"name": "Coffee", "quantity": 2, "base_unit_price": 50}],
        }
        payload.update(overrides)
        return payload

    return _make
