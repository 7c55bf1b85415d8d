from datetime import timedelta

import jwt

from common.auth_utils import create_access_token
from common.config import ALGORITHM, SECRET_KEY
from tests.conftest import BUYER_WALLET


def test_sign_up_creates_user(client):
    response = client.post(
        "/auth/sign-up", json={"wallet_address": BUYER_WALLET, "role": "USER"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["wallet_address"] == BUYER_WALLET
    assert body["user"]["role"] == "USER"
    assert body["user_id"] == body["user"]["id"]


def test_sign_up_rejects_duplicate_wallet(client, buyer):
    response = client.post(
        "/auth/sign-up", json={"wallet_address": BUYER_WALLET, "role": "ORGANIZER"}
    )

    assert response.status_code == 409


def test_sign_up_validates_input(client):
    short = client.post("/auth/sign-up", json={"wallet_address": "0x12", "role": "USER"})
    bad_role = client.post(
        "/auth/sign-up", json={"wallet_address": BUYER_WALLET, "role": "ADMIN"}
    )

    assert short.status_code == 422
    assert bad_role.status_code == 422


def test_sign_in_unknown_wallet(client):
    response = client.post("/auth/sign-in", json={"wallet_address": BUYER_WALLET})

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found. Please sign up first."


def test_sign_in_issues_token_with_role(client, organizer):
    response = client.post(
        "/auth/sign-in", json={"wallet_address": organizer["wallet_address"]}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    payload = jwt.decode(body["access_token"], SECRET_KEY, algorithms=[ALGORITHM])
    assert payload["sub"] == organizer["id"]
    assert payload["role"] == "ORGANIZER"
    assert payload["wallet_address"] == organizer["wallet_address"]


def test_me_returns_current_user(client, buyer):
    response = client.get("/auth/me", headers=buyer["headers"])

    assert response.status_code == 200
    assert response.json()["user"]["id"] == buyer["id"]


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_me_rejects_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"


def test_me_rejects_expired_token(client, buyer, db_session):
    from auth.schemas import User

    user = db_session.get(User, buyer["id"])
    token = create_access_token(user, expires_delta=timedelta(seconds=-1))

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_token_for_deleted_user_is_rejected(client, buyer, db_session):
    from auth.schemas import User

    db_session.delete(db_session.get(User, buyer["id"]))
    db_session.commit()

    response = client.get("/auth/me", headers=buyer["headers"])

    assert response.status_code == 401
