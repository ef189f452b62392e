import pytest
from sqlalchemy.exc import OperationalError

from bloodcare.access import AccessGuard, AuthContext
from bloodcare.errors import Forbidden

from .conftest import bearer


class FakeUsers:
    def __init__(self, users):
        self.users = users

    def get_user(self, email):
        return self.users.get(email)


class FakeUser:
    def __init__(self, role, status="active"):
        self.role = role
        self.status = status


def test_authorize_resolves_role_and_status():
    guard = AccessGuard(FakeUsers({"a@x.com": FakeUser("admin", "blocked")}))
    assert guard.authorize("a@x.com") == AuthContext("a@x.com", "admin", "blocked")
    assert guard.authorize("ghost@x.com") == AuthContext("ghost@x.com")


def test_require_role_fails_closed_for_missing_user():
    guard = AccessGuard(FakeUsers({}))
    with pytest.raises(Forbidden) as exc:
        guard.require_role(guard.authorize("ghost@x.com"), "admin")
    assert exc.value.to_dict() == {"message": "Admin only Actions!", "role": None}


def test_require_role_accepts_admin():
    guard = AccessGuard(FakeUsers({"a@x.com": FakeUser("admin")}))
    context = guard.authorize("a@x.com")
    assert context.is_admin
    guard.require_role(context, "admin")


def test_volunteer_is_not_admin():
    guard = AccessGuard(FakeUsers({"v@x.com": FakeUser("volunteer")}))
    with pytest.raises(Forbidden):
        guard.require_role(guard.authorize("v@x.com"), "admin")


def test_require_self():
    guard = AccessGuard(FakeUsers({}))
    context = AuthContext("a@x.com")
    guard.require_self(context, "a@x.com")
    with pytest.raises(Forbidden) as exc:
        guard.require_self(context, "b@x.com")
    assert exc.value.to_dict() == {"message": "Forbidden Access", "email": "a@x.com", "role": None}


def test_store_failure_is_a_500(app, client, monkeypatch):
    def broken():
        raise OperationalError("SELECT count(*) FROM users", {}, Exception("database is down"))

    monkeypatch.setattr(app.extensions["bloodcare"].users, "count", broken)
    response = client.get("/application-stats", headers=bearer("a@x.com"))
    assert response.status_code == 500
    assert response.get_json() == {"message": "Database operation failed"}
