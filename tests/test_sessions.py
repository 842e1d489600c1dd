import pytest

from app.core.errors import Forbidden, Unauthenticated
from app.core.gate import Access, authorize, classify_page
from app.models.auth import Identity, Role
from app.services.sessions import SessionStore

USER = Identity(id="user-1", name="Asha", email="asha@example.com", role=Role.user)
ADMIN = Identity(id="admin-001", name="Administrator", email="admin@example.com", role=Role.admin)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_tokens_are_unique_and_opaque():
    store = SessionStore()
    t1 = store.create(USER)
    t2 = store.create(USER)
    assert t1 != t2
    assert USER.id not in t1 and len(t1) >= 32


def test_resolve_unknown_or_missing_token_is_anonymous():
    store = SessionStore()
    assert store.resolve(None) is None
    assert store.resolve("") is None
    assert store.resolve("nope") is None


def test_session_expires_after_ttl():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    token = store.create(USER)

    clock.now += 59
    assert store.resolve(token) == USER
    clock.now += 1
    assert store.resolve(token) is None
    assert len(store) == 0


def test_purge_expired():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=10, clock=clock)
    store.create(USER)
    clock.now += 5
    keep = store.create(ADMIN)
    clock.now += 6
    assert store.purge_expired() == 1
    assert store.resolve(keep) == ADMIN


def test_destroy_is_idempotent():
    store = SessionStore()
    token = store.create(USER)
    assert store.destroy(token) is True
    assert store.destroy(token) is False
    assert store.destroy(None) is False
    assert store.resolve(token) is None


@pytest.mark.parametrize("path,expected", [
    ("/login.html", Access.public),
    ("/signup.html", Access.public),
    ("/ai.html", Access.public),
    ("/problem.html", Access.public),
    ("/admin.html", Access.admin),
    ("/dashboard.html", Access.authenticated),
    ("/practice.html", Access.authenticated),
    ("//admin.html", Access.admin),
    ("/x/../admin.html", Access.admin),
    ("//login.html", Access.public),
])
def test_classify_page(path, expected):
    assert classify_page(path) == expected


def test_authorize():
    assert authorize(None, Access.public) is None
    assert authorize(USER, Access.authenticated) == USER
    assert authorize(ADMIN, Access.admin) == ADMIN

    with pytest.raises(Unauthenticated):
        authorize(None, Access.authenticated)
    with pytest.raises(Unauthenticated):
        authorize(None, Access.admin)
    with pytest.raises(Forbidden) as exc:
        authorize(USER, Access.admin)
    assert exc.value.status_code == 403


def test_evictions_are_reported():
    clock = FakeClock()
    evicted = []
    store = SessionStore(ttl_seconds=10, clock=clock, on_evict=evicted.append)

    gone = store.create(USER)
    closed = store.create(ADMIN)
    store.destroy(closed)
    assert evicted == [closed]

    clock.now += 11
    fresh = store.create(USER)  # balaie les expirées
    assert evicted == [closed, gone]
    assert store.resolve(fresh) == USER

    clock.now += 11
    assert store.resolve(fresh) is None
    assert evicted == [closed, gone, fresh]
