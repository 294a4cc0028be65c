from app.core.security import create_access_token, decode_access_token, hash_password
from app.models.account_model import Account
from app.models.enums import AccountRole


def seed_account(db, role=AccountRole.ADMIN, **flags):
    account = Account(
        account_id=1,
        email="admin@example.com",
        password_hash=hash_password("correct-password"),
        role=role,
        is_active=True,
        **flags,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def test_login_success(client, db_session):
    account = seed_account(db_session)
    resp = client.post(
        "/auth/login",
        json={"email": account.email, "password": "correct-password"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    payload = decode_access_token(body["access_token"])
    assert payload["sub"] == str(account.account_id)
    assert payload["role"] == "ADMIN"


def test_login_invalid_password(client, db_session):
    account = seed_account(db_session)
    resp = client.post(
        "/auth/login",
        json={"email": account.email, "password": "wrong-password"},
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_login_unknown_email(client):
    resp = client.post(
        "/auth/login",
        json={"email": "missing@example.com", "password": "whatever"},
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_me_reports_full_permissions_for_admin(client, db_session):
    account = seed_account(db_session)
    token = create_access_token(str(account.account_id))
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["permissions"] == {"can_read": True, "can_write": True, "can_delete": True}


def test_staff_permissions_come_from_account_flags(client, db_session):
    account = seed_account(db_session, role=AccountRole.STAFF, can_read=True, can_write=True, can_delete=False)
    token = create_access_token(str(account.account_id))
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.json()["permissions"] == {"can_read": True, "can_write": True, "can_delete": False}


def test_staff_without_delete_cannot_delete(client, db_session, applications):
    account = seed_account(db_session, role=AccountRole.STAFF, can_read=True, can_write=True, can_delete=False)
    token = create_access_token(str(account.account_id))
    resp = client.delete("/applications/1?confirm=true", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_invalid_token_rejected(client):
    resp = client.get("/applications", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"
