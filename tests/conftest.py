from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from printshop.config import Settings
from printshop.main import create_app
from printshop.models import Order
from printshop.tracking import SimulatedTracker

# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def settings(tmp_path):
    return Settings(
        database_url=TEST_DATABASE_URL,
        data_dir=tmp_path,
        max_upload_mb=1,
        admin_password="s3cret",
    )


@pytest.fixture(scope="function")
def make_client(engine, settings):
    """
    Builds a TestClient around a fresh app sharing the test engine.
    """
    clients = []

    def _make(tracker=None, raise_server_exceptions=True, **overrides):
        for key, value in overrides.items():
            setattr(settings, key, value)
        app = create_app(settings, engine=engine, tracker=tracker)
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture(scope="function")
def client(make_client):
    return make_client()


@pytest.fixture
def add_order(client, engine):
    """
    Inserts an order row directly, bypassing pricing and id assignment.
    """
    counter = iter(range(1000, 2000))

    def _add(**fields):
        values = {
            "order_id": f"ORDER_{next(counter)}",
            "name": "Walk-in",
            "copies": 1,
            "paper_size": "A4",
            "print_side": "single-sided",
            "color": "bw",
            "total": Decimal("11"),
        }
        values.update(fields)
        with Session(engine) as session:
            order = Order(**values)
            session.add(order)
            session.commit()
            session.refresh(order)
            return order

    return _add


@pytest.fixture
def order_payload():
    return {
        "file": "file-1700000000000-42.pdf",
        "name": "Alice",
        "copies": 10,
        "paperSize": "A3",
        "printSide": "double-sided",
        "color": "color",
    }


@pytest.fixture
def create_order(client, order_payload):
    def _create(**overrides):
        response = client.post("/api/orders", json={**order_payload, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class FixedRandom:
    """Returns the given values in order, repeating the last one."""

    def __init__(self, *values):
        self.values = list(values)

    def __call__(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def simulated_client(make_client):
    def _make(*values):
        return make_client(tracker=SimulatedTracker(rng=FixedRandom(*values)))

    return _make
