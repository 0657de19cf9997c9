"""Tests for the per-session favorites store."""

import threading

import pytest

from movie_finder.domain.errors import (
    CapacityError,
    MissingSessionError,
    ValidationError,
)
from movie_finder.domain.favorites import Favorite
from movie_finder.services.favorites import (
    MAX_FAVORITES_PER_SESSION,
    SESSION_TTL,
    FavoritesService,
    FavoritesStore,
)
from tests.conftest import FakeClock


@pytest.fixture
def store(clock: FakeClock) -> FavoritesStore:
    return FavoritesStore(clock=clock)


def test_add_then_list_and_remove(store: FavoritesStore) -> None:
    store.add("s1", Favorite(id=10, title="Inception", year="2010"))

    assert [favorite.id for favorite in store.list("s1")] == [10]

    store.remove("s1", 10)

    assert store.list("s1") == []


def test_remove_unknown_id_is_noop(store: FavoritesStore) -> None:
    store.add("s1", Favorite(id=1, title="Alien"))

    store.remove("s1", 999)

    assert len(store.list("s1")) == 1


def test_add_is_upsert(store: FavoritesStore) -> None:
    store.add("s1", Favorite(id=7, title="Old", year="1999"))
    store.add("s1", Favorite(id=7, title="New", year="2000", poster_url="p.jpg"))

    favorites = store.list("s1")

    assert len(favorites) == 1
    assert favorites[0].title == "New"
    assert favorites[0].year == "2000"
    assert favorites[0].poster_url == "p.jpg"


def test_favorite_identity_is_id_only() -> None:
    assert Favorite(id=1, title="A") == Favorite(id=1, title="B")
    assert len({Favorite(id=1, title="A"), Favorite(id=1)}) == 1


def test_list_orders_by_title_then_id(store: FavoritesStore) -> None:
    store.add("s1", Favorite(id=3, title="Banana"))
    store.add("s1", Favorite(id=2, title=None))
    store.add("s1", Favorite(id=1, title="apple"))
    store.add("s1", Favorite(id=5, title="Cherry"))
    store.add("s1", Favorite(id=4, title="cherry"))
    store.add("s1", Favorite(id=9, title=None))

    ordered = [(favorite.title, favorite.id) for favorite in store.list("s1")]

    assert ordered == [
        ("apple", 1),
        ("Banana", 3),
        ("cherry", 4),
        ("Cherry", 5),
        (None, 2),
        (None, 9),
    ]


def test_capacity_limit(store: FavoritesStore) -> None:
    for favorite_id in range(1, MAX_FAVORITES_PER_SESSION + 1):
        store.add("s1", Favorite(id=favorite_id))

    with pytest.raises(CapacityError):
        store.add("s1", Favorite(id=MAX_FAVORITES_PER_SESSION + 1))

    assert len(store.list("s1")) == MAX_FAVORITES_PER_SESSION

    store.add("s1", Favorite(id=1, title="Updated"))
    assert len(store.list("s1")) == MAX_FAVORITES_PER_SESSION


def test_invalid_ids_are_rejected(store: FavoritesStore) -> None:
    with pytest.raises(ValidationError):
        store.add("s1", Favorite(id=0))
    with pytest.raises(ValidationError):
        store.add("s1", Favorite(id=None))
    with pytest.raises(ValidationError):
        store.add("s1", None)
    with pytest.raises(ValidationError):
        store.remove("s1", -1)

    assert len(store) == 0


@pytest.mark.parametrize("session_id", ["", "   ", None])
def test_missing_session_id(store: FavoritesStore, session_id: str | None) -> None:
    with pytest.raises(MissingSessionError):
        store.list(session_id)
    with pytest.raises(MissingSessionError):
        store.add(session_id, Favorite(id=1))
    with pytest.raises(MissingSessionError):
        store.remove(session_id, 1)


def test_sessions_are_isolated(store: FavoritesStore) -> None:
    store.add("s1", Favorite(id=1, title="Alien"))
    store.add("s2", Favorite(id=2, title="Heat"))

    assert [favorite.id for favorite in store.list("s1")] == [1]
    assert [favorite.id for favorite in store.list("s2")] == [2]


def test_expired_bucket_starts_empty(store: FavoritesStore, clock: FakeClock) -> None:
    store.add("s1", Favorite(id=1, title="Alien"))

    clock.advance(days=7, seconds=1)

    assert store.list("s1") == []


def test_bucket_expires_exactly_at_ttl(
    store: FavoritesStore, clock: FakeClock
) -> None:
    store.add("s1", Favorite(id=1))

    clock.advance(seconds=SESSION_TTL.total_seconds())

    assert store.list("s1") == []


def test_access_extends_bucket_ttl(store: FavoritesStore, clock: FakeClock) -> None:
    store.add("s1", Favorite(id=1, title="Alien"))

    for _ in range(3):
        clock.advance(days=6)
        assert len(store.list("s1")) == 1


def test_stored_favorite_is_a_copy(store: FavoritesStore) -> None:
    favorite = Favorite(id=1, title="Alien")
    store.add("s1", favorite)

    assert store.list("s1")[0] is not favorite


def test_concurrent_first_touch_keeps_all_writes(store: FavoritesStore) -> None:
    barrier = threading.Barrier(8)

    def add_range(offset: int) -> None:
        barrier.wait()
        for favorite_id in range(offset * 10 + 1, offset * 10 + 11):
            store.add("shared", Favorite(id=favorite_id))

    threads = [threading.Thread(target=add_range, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 1
    assert len(store.list("shared")) == 80


def test_concurrent_sessions_stay_isolated(store: FavoritesStore) -> None:
    barrier = threading.Barrier(4)

    def fill(session_id: str) -> None:
        barrier.wait()
        for favorite_id in range(1, 51):
            store.add(session_id, Favorite(id=favorite_id, title=session_id))
            if favorite_id % 5 == 0:
                store.remove(session_id, favorite_id)

    sessions = [f"session-{i}" for i in range(4)]
    threads = [threading.Thread(target=fill, args=(sid,)) for sid in sessions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for session_id in sessions:
        favorites = store.list(session_id)
        assert len(favorites) == 40
        assert {favorite.title for favorite in favorites} == {session_id}


def test_service_rejects_missing_body(store: FavoritesStore) -> None:
    service = FavoritesService(store)

    with pytest.raises(ValidationError):
        service.add("s1", None)
    with pytest.raises(ValidationError):
        service.remove("s1", 0)


def test_service_delegates_to_store(store: FavoritesStore) -> None:
    service = FavoritesService(store)

    service.add("s1", Favorite(id=3, title="Heat"))
    service.add("s1", Favorite(id=4, title="Alien"))
    service.remove("s1", 3)

    assert [favorite.id for favorite in service.list("s1")] == [4]
