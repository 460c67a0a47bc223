import pytest
from ispdesk import create_app
from ispdesk.extension import db
from ispdesk.service import ledger
from ispdesk.service.identity import Actor
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
        "SEED_DEMO_DATA": False,
        "ADMIN_PIN": "1234",
        "AGENT_PIN": "0000",
        "ADMIN_NAME": "Vinod",
        "AGENT_NAME": "Subhajit",
        "BUSINESS_NAME": "Intech Broadband",
        "CURRENCY_SYMBOL": "Rs.",
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin():
    return Actor(id="admin", name="Vinod", role=ROLE_ADMIN)


@pytest.fixture
def agent():
    return Actor(id="agent", name="Subhajit", role=ROLE_AGENT)


@pytest.fixture
def make_customer(app):
    def _make(name="Abdur Rahman", phone="8759114530", plan=500, **extra):
        data = {
            "name": name,
            "phone": phone,
            "address": extra.pop("address", "Kaliachak, Malda"),
            "monthly_plan_amount": plan,
            "due_day": extra.pop("due_day", 1),
        }
        data.update(extra)
        return ledger.create_customer(data)
    return _make


def _login(client, pin):
    res = client.post("/login", json={"pin": pin})
    assert res.status_code == 200, res.get_json()
    return {"Authorization": f"Bearer {res.get_json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return _login(client, "1234")


@pytest.fixture
def agent_headers(client):
    return _login(client, "0000")
