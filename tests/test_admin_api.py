import pytest
from fastapi import status

from vacay.models.user import User
from vacay.models.vacation_request import VacationRequest
from vacay.services.request_ledger import RequestLedger

ADMIN_ROUTES = [
    ("get", "/admin/users", None),
    ("post", "/admin/users", {"name": "X", "email": "x@example.com", "password": "secret1"}),
    ("put", "/admin/users/1", {"name": "Y"}),
    ("delete", "/admin/users/1", None),
    ("get", "/admin/requests", None),
    ("post", "/admin/requests/1/approve", None),
    ("post", "/admin/requests/1/reject", None),
]


def _call(client, method, path, body):
    if body is None:
        return getattr(client, method)(path)
    return getattr(client, method)(path, json=body)


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES)
def test_admin_routes_require_session(client, method, path, body):
    response = _call(client, method, path, body)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES)
def test_admin_routes_forbid_employees(client, as_employee, method, path, body):
    response = _call(client, method, path, body)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "Forbidden"}


def test_list_users(client, as_manager, employee_user):
    response = client.get("/admin/users")
    assert response.status_code == status.HTTP_200_OK
    users = response.json()
    assert [u["id"] for u in users] == [employee_user.id, as_manager.id]
    assert set(users[0]) == {"id", "name", "email", "role", "employee_code", "created_at"}


def test_create_user(client, db_session, as_manager):
    response = client.post("/admin/users", json={
        "name": "New Manager",
        "email": "NEW@example.com",
        "password": "secret1",
        "role": "manager",
        "employee_code": "",
    })
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    created = db_session.get(User, data["id"])
    assert created.email == "new@example.com"
    assert created.role.value == "manager"
    assert created.employee_code == data["employee_code"]


def test_create_user_duplicate_email(client, as_manager, employee_user):
    response = client.post("/admin/users", json={
        "name": "Dup", "email": employee_user.email, "password": "secret1",
    })
    assert response.status_code == status.HTTP_409_CONFLICT


def test_update_user(client, db_session, as_manager, employee_user):
    response = client.put(f"/admin/users/{employee_user.id}", json={"name": "Edward", "password": ""})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True}
    db_session.refresh(employee_user)
    assert employee_user.name == "Edward"


def test_update_user_without_body_changes_nothing(client, db_session, as_manager, employee_user):
    old_hash = employee_user.password_hash
    response = client.put(f"/admin/users/{employee_user.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True}

    db_session.refresh(employee_user)
    assert employee_user.name == "Eddie Employee"
    assert employee_user.email == "eddie@example.com"
    assert employee_user.password_hash == old_hash


def test_update_user_cannot_change_role(client, db_session, as_manager, employee_user):
    client.put(f"/admin/users/{employee_user.id}", json={"role": "manager"})
    db_session.refresh(employee_user)
    assert employee_user.role.value == "employee"


def test_update_missing_user(client, as_manager):
    response = client.put("/admin/users/999", json={"name": "Ghost"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "User not found"}


def test_update_email_collision(client, as_manager, employee_user):
    response = client.put(f"/admin/users/{employee_user.id}", json={"email": as_manager.email})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_delete_user_cascades(client, db_session, as_manager, employee_user):
    ledger = RequestLedger(db_session)
    for _ in range(3):
        ledger.create(employee_user.id, "2025-06-01", "2025-06-05", "summer")
    user_id = employee_user.id

    response = client.delete(f"/admin/users/{user_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""
    assert db_session.query(VacationRequest).filter(VacationRequest.user_id == user_id).count() == 0


def test_delete_missing_user(client, as_manager):
    response = client.delete("/admin/users/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not found"}


def test_manager_cannot_delete_self(client, db_session, as_manager):
    response = client.delete(f"/admin/users/{as_manager.id}")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.get(User, as_manager.id) is not None


def test_list_all_requests(client, db_session, as_manager, employee_user):
    ledger = RequestLedger(db_session)
    ledger.create(employee_user.id, "2025-01-01", "2025-01-02", "mine")
    ledger.create(as_manager.id, "2025-02-01", "2025-02-02", "boss")

    response = client.get("/admin/requests")
    assert response.status_code == status.HTTP_200_OK
    rows = response.json()
    assert [r["reason"] for r in rows] == ["boss", "mine"]
    assert rows[1]["user_name"] == "Eddie Employee"
    assert rows[1]["email"] == "eddie@example.com"
    assert rows[1]["status"] == "pending"


def test_reject_request(client, db_session, as_manager, employee_user):
    request = RequestLedger(db_session).create(employee_user.id, "2025-01-01", "2025-01-02", "a")
    response = client.post(f"/admin/requests/{request.id}/reject")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True}
    db_session.refresh(request)
    assert request.status == "rejected"


def test_decision_on_unknown_request_still_succeeds(client, as_manager):
    response = client.post("/admin/requests/4242/approve")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True}


def test_unknown_decision_is_not_routed(client, as_manager):
    response = client.post("/admin/requests/1/escalate")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_non_numeric_id_is_bad_request(client, as_manager):
    response = client.put("/admin/users/abc", json={"name": "X"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
