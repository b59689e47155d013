import threading
import time

from icon_server.core.cache import MemoryCache, ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=2)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read():
                # Deadlocks (BrokenBarrierError) unless both readers hold the lock at once.
                both_inside.wait()
        except BaseException as exc:  # noqa: BLE001 - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert errors == []


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    events: list[str] = []
    writer_inside = threading.Event()

    def writer() -> None:
        with lock.write():
            writer_inside.set()
            time.sleep(0.05)
            events.append("write-done")

    def reader() -> None:
        writer_inside.wait(timeout=2)
        with lock.read():
            events.append("read")

    w = threading.Thread(target=writer)
    r = threading.Thread(target=reader)
    w.start()
    r.start()
    w.join(timeout=5)
    r.join(timeout=5)

    assert events == ["write-done", "read"]


def test_memory_cache_concurrent_set_and_get_stays_bounded() -> None:
    cache = MemoryCache(ttl_seconds=60, max_entries=50)

    def worker(n: int) -> None:
        for i in range(200):
            key = f"w{n}-{i % 80}"
            cache.set(key, key.encode())
            value = cache.get(key)
            assert value in (None, key.encode())

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(cache) <= 50
