import threading
from concurrent.futures import ThreadPoolExecutor

from rpsbot.backend.models import Participant
from rpsbot.backend.store import InMemorySessionStore, create_store


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_create_store_returns_in_memory_store() -> None:
    store = create_store(ttl_seconds=30, claim_lease_seconds=5)

    assert isinstance(store, InMemorySessionStore)
    assert store.ttl_seconds == 30
    assert store.claim_lease_seconds == 5


def test_create_and_get_open_session() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))

    session = store.get("s1")

    assert session is not None
    assert session.is_open
    assert session.challenger == Participant("U1", "rock")
    assert store.get("missing") is None


def test_create_overwrites_existing_session() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))
    store.create("s1", Participant("U3", "paper"))

    session = store.get("s1")

    assert session is not None
    assert session.challenger.participant_id == "U3"
    assert len(store) == 1


def test_submit_response_claims_session_once() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))

    first = store.submit_response("s1", Participant("U2", "paper"))
    second = store.submit_response("s1", Participant("U3", "scissors"))

    assert first is not None
    assert first.responder == Participant("U2", "paper")
    assert second is None
    assert store.get("s1") is None


def test_submit_response_for_missing_session_returns_none() -> None:
    store = InMemorySessionStore()

    assert store.submit_response("nope", Participant("U2", "rock")) is None


def test_release_reopens_claimed_session() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))
    store.submit_response("s1", Participant("U2", "paper"))

    store.release("s1")

    session = store.get("s1")
    assert session is not None
    assert session.responder is None


def test_remove_is_idempotent() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))

    store.remove("s1")
    store.remove("s1")
    store.remove("never-created")

    assert "s1" not in store
    assert len(store) == 0


def test_sweep_expired_drops_old_sessions_only() -> None:
    clock = _FakeClock()
    store = InMemorySessionStore(ttl_seconds=60, clock=clock)
    store.create("old", Participant("U1", "rock"))
    clock.now += 45
    store.create("fresh", Participant("U2", "paper"))
    clock.now += 20

    expired = store.sweep_expired()

    assert expired == ["old"]
    assert "old" not in store
    assert "fresh" in store


def test_sweep_expired_is_disabled_without_ttl() -> None:
    clock = _FakeClock()
    store = InMemorySessionStore(ttl_seconds=0, clock=clock)
    store.create("s1", Participant("U1", "rock"))
    clock.now += 10_000

    assert store.sweep_expired() == []
    assert "s1" in store


def test_concurrent_submissions_have_single_winner() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))
    barrier = threading.Barrier(8)

    def submit(index: int):
        barrier.wait()
        return store.submit_response("s1", Participant(f"U{index + 2}", "paper"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(submit, range(8)))

    claimed = [result for result in results if result is not None]
    assert len(claimed) == 1
    store.remove("s1")
    assert len(store) == 0


def test_claim_lease_expiry_reopens_session() -> None:
    clock = _FakeClock()
    store = InMemorySessionStore(claim_lease_seconds=30, clock=clock)
    store.create("s1", Participant("U1", "rock"))
    store.submit_response("s1", Participant("U2", "paper"))

    clock.now += 29
    assert store.get("s1") is None
    assert store.submit_response("s1", Participant("U3", "rock")) is None

    clock.now += 1
    assert store.get("s1") is not None
    retried = store.submit_response("s1", Participant("U2", "paper"))
    assert retried is not None
    assert retried.responder == Participant("U2", "paper")


def test_remove_claimed_only_removes_claimed_sessions() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))

    assert store.remove_claimed("s1") is False
    assert "s1" in store

    store.submit_response("s1", Participant("U2", "paper"))
    assert store.remove_claimed("s1") is True
    assert "s1" not in store
    assert store.remove_claimed("s1") is False


def test_remove_claimed_spares_session_overwritten_after_claim() -> None:
    store = InMemorySessionStore()
    store.create("s1", Participant("U1", "rock"))
    store.submit_response("s1", Participant("U2", "paper"))
    store.create("s1", Participant("U9", "scissors"))

    assert store.remove_claimed("s1") is False
    session = store.get("s1")
    assert session is not None
    assert session.challenger.participant_id == "U9"
