from __future__ import annotations

import threading

from cocktail_api.core.auth_code_store import AuthCodeStore


def test_save_overwrites_previous_code(code_store):
    code_store.save("AuthCode a@x.com", "111111")
    code_store.save("AuthCode a@x.com", "222222")

    assert code_store.get("AuthCode a@x.com") == "222222"
    assert len(code_store) == 1


def test_missing_key_returns_none(code_store):
    assert code_store.get("AuthCode nobody@x.com") is None
    assert "AuthCode nobody@x.com" not in code_store


def test_code_expires_after_ttl(code_store, clock):
    code_store.save("AuthCode a@x.com", "123456")
    clock.advance(299)
    assert code_store.get("AuthCode a@x.com") == "123456"

    clock.advance(1)
    assert code_store.get("AuthCode a@x.com") is None
    # evicted on read
    assert len(code_store) == 0


def test_save_restarts_ttl(code_store, clock):
    code_store.save("k", "111111")
    clock.advance(200)
    code_store.save("k", "222222")
    clock.advance(200)

    assert code_store.get("k") == "222222"


def test_non_positive_ttl_never_expires(clock):
    store = AuthCodeStore(ttl_seconds=0, clock=clock)
    store.save("k", "654321")
    clock.advance(10**9)

    assert store.get("k") == "654321"
    assert store.purge_expired() == 0


def test_purge_expired_only_drops_stale_entries(code_store, clock):
    code_store.save("old", "111111")
    clock.advance(250)
    code_store.save("fresh", "222222")
    clock.advance(100)

    assert code_store.purge_expired() == 1
    assert code_store.get("old") is None
    assert code_store.get("fresh") == "222222"


def test_delete_and_clear(code_store):
    code_store.save("a", "1")
    code_store.save("b", "2")
    code_store.delete("a")
    code_store.delete("missing")
    assert code_store.get("a") is None
    assert len(code_store) == 1

    code_store.clear()
    assert len(code_store) == 0


def test_concurrent_writers_do_not_lose_entries():
    store = AuthCodeStore(ttl_seconds=60)

    def writer(prefix: int):
        for i in range(200):
            store.save(f"AuthCode {prefix}-{i}@x.com", f"{i:06d}")
            store.get(f"AuthCode {prefix}-{i}@x.com")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 8 * 200
    assert store.get("AuthCode 3-17@x.com") == "000017"
