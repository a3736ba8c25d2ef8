import sys, os, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
os.environ.setdefault("APP_ENV", "test")

import pytest

from rental_console import create_app
from rental_console.models.store import Store


@pytest.fixture(autouse=True)
def store(tmp_path):
    """
    Fresh file-backed store per test, installed as the singleton so services
    and the app factory all see the SAME object. Seeds the default admin account.
    """
    st = Store(tmp_path / "data.pkl")
    Store.reset_instance(st)
    yield st
    Store.reset_instance(None)


@pytest.fixture
def app(store):
    app = create_app({"TESTING": True, "SECRET_KEY": "test", "DATA_PATH": store.path})
    return app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def admin_client(client):
    """Test client logged in as the default admin."""
    r = client.post("/login", data={"username": "admin", "password": "Admin123"})
    assert r.status_code == 302
    return client


@pytest.fixture
def booking_form():
    return {
        "client_name": "Giulia Rossi",
        "client_email": "giulia@example.com",
        "car_model": "Ferrari Roma",
        "car_plate": "gx123ab",
        "delivery_datetime": "2024-01-01T10:00",
        "collection_datetime": "2024-01-06T10:00",
        "rental_day_hour_tolerance": "1",
        "rental_price_gross": "5000",
        "amount_paid": "1500",
        "security_deposit_amount": "3000",
        "status": "confirmed",
    }
