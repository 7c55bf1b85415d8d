import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from common.database import Base, get_db
from main import app

ORGANIZER_WALLET = "0x" + "a" * 40
OTHER_ORGANIZER_WALLET = "0x" + "b" * 40
BUYER_WALLET = "0x" + "c" * 40
OTHER_BUYER_WALLET = "0x" + "d" * 40

CONTRACT_ADDRESS = "0x" + "1234567890" * 4


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, wallet_address, role):
    response = client.post(
        "/auth/sign-up", json={"wallet_address": wallet_address, "role": role}
    )
    assert response.status_code == 201, response.text
    response = client.post("/auth/sign-in", json={"wallet_address": wallet_address})
    assert response.status_code == 200, response.text
    body = response.json()
    return {
        "id": body["user"]["id"],
        "wallet_address": wallet_address,
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }


@pytest.fixture
def organizer(client):
    return register(client, ORGANIZER_WALLET, "ORGANIZER")


@pytest.fixture
def other_organizer(client):
    return register(client, OTHER_ORGANIZER_WALLET, "ORGANIZER")


@pytest.fixture
def buyer(client):
    return register(client, BUYER_WALLET, "USER")


@pytest.fixture
def other_buyer(client):
    return register(client, OTHER_BUYER_WALLET, "USER")


def event_payload(**overrides):
    payload = {
        "title": "Summer Festival 2026",
        "description": "Open air, three stages",
        "venue": "Riverside Park",
        "location": "Berlin",
        "category": "music",
        "start_time": "2026-07-01T18:00:00",
        "end_time": "2026-07-01T23:30:00",
    }
    payload.update(overrides)
    return payload


def create_event(client, user, **overrides):
    response = client.post("/events", json=event_payload(**overrides), headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()


def add_tiers(client, user, event_id, tiers=None):
    tiers = tiers or [
        {"name": "VIP", "price": "0.05", "total_supply": 2},
        {"name": "General", "price": "0.01", "total_supply": 10},
    ]
    response = client.post(
        f"/events/{event_id}/tiers/bulk", json={"tiers": tiers}, headers=user["headers"]
    )
    assert response.status_code == 201, response.text
    return response.json()["tiers"]


def activate(client, user, event_id, contract_address=CONTRACT_ADDRESS):
    response = client.put(
        f"/events/{event_id}/activate",
        json={"contract_address": contract_address},
        headers=user["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()["event"]


@pytest.fixture
def draft_event(client, organizer):
    return create_event(client, organizer)


@pytest.fixture
def active_event(client, organizer):
    """An activated event with General (0.01) and VIP (0.05) tiers."""
    event = create_event(client, organizer)
    tiers = add_tiers(client, organizer, event["id"])
    event = activate(client, organizer, event["id"])
    event["tiers"] = tiers
    return event


def confirm(client, user, event, tier, token_id, tx_hash=None):
    return client.post(
        "/tickets/confirm",
        json={
            "event_id": event["id"],
            "tier_id": tier["id"],
            "tx_hash": tx_hash or f"0x{token_id:064x}",
            "token_id": token_id,
        },
        headers=user["headers"],
    )


@pytest.fixture
def ticket(client, buyer, active_event):
    general = active_event["tiers"][0]
    response = confirm(client, buyer, active_event, general, token_id=1)
    assert response.status_code == 201, response.text
    return response.json()["ticket"]
