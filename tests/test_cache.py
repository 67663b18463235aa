import threading
import time
import unittest

from oj_match.cache import ResolutionCache
from oj_match.core.resolution import MatchKind, MatchResult, resolve


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingResolver:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def __call__(self, query: str, registry: tuple[str, ...]) -> MatchResult:
        self.calls.append((query, registry))
        return resolve(query, registry)


class TestResolutionCache(unittest.TestCase):
    def test_default_resolver(self):
        cache = ResolutionCache(["DAM - Jundiaí"])
        result = cache.resolve("dam jundiai")
        self.assertIs(result.matches[0].kind, MatchKind.EXACT)

    def test_reuses_result_within_ttl(self):
        resolver = CountingResolver()
        clock = FakeClock()
        cache = ResolutionCache(["DAM - Jundiaí"], ttl_seconds=30, resolver=resolver, clock=clock)
        first = cache.resolve("dam jundiai")
        clock.now = 29.0
        second = cache.resolve("dam jundiai")
        self.assertIs(first, second)
        self.assertEqual(len(resolver.calls), 1)
        self.assertEqual(len(cache), 1)

    def test_expires_after_ttl(self):
        resolver = CountingResolver()
        clock = FakeClock()
        cache = ResolutionCache(["DAM - Jundiaí"], ttl_seconds=30, resolver=resolver, clock=clock)
        cache.resolve("dam jundiai")
        clock.now = 31.0
        cache.resolve("dam jundiai")
        self.assertEqual(len(resolver.calls), 2)

    def test_queries_are_not_shared(self):
        resolver = CountingResolver()
        cache = ResolutionCache(["DAM - Jundiaí"], resolver=resolver)
        found = cache.resolve("dam jundiai")
        missing = cache.resolve("Franca")
        self.assertTrue(found.found)
        self.assertFalse(missing.found)
        self.assertEqual(missing.query, "Franca")
        self.assertEqual(len(resolver.calls), 2)

    def test_zero_ttl_never_stores(self):
        resolver = CountingResolver()
        cache = ResolutionCache(["DAM - Jundiaí"], ttl_seconds=0, resolver=resolver)
        cache.resolve("dam jundiai")
        cache.resolve("dam jundiai")
        self.assertEqual(len(resolver.calls), 2)
        self.assertEqual(len(cache), 0)

    def test_evicts_oldest(self):
        resolver = CountingResolver()
        cache = ResolutionCache(["DAM - Jundiaí"], max_entries=1, resolver=resolver)
        cache.resolve("a")
        cache.resolve("b")
        cache.resolve("a")
        self.assertEqual([q for q, _ in resolver.calls], ["a", "b", "a"])
        self.assertEqual(len(cache), 1)

    def test_update_registry_invalidates(self):
        resolver = CountingResolver()
        cache = ResolutionCache(["DAM - Jundiaí"], resolver=resolver)
        self.assertTrue(cache.resolve("dam jundiai").found)
        cache.update_registry(["LIQ1 - Campinas"])
        self.assertEqual(cache.registry, ("LIQ1 - Campinas",))
        self.assertFalse(cache.resolve("dam jundiai").found)
        self.assertEqual(resolver.calls[-1][1], ("LIQ1 - Campinas",))

    def test_invalidate_single_query(self):
        resolver = CountingResolver()
        cache = ResolutionCache(["DAM - Jundiaí"], resolver=resolver)
        cache.resolve("a")
        cache.resolve("b")
        cache.invalidate("a")
        cache.resolve("a")
        cache.resolve("b")
        self.assertEqual([q for q, _ in resolver.calls], ["a", "b", "a"])
        cache.invalidate()
        self.assertEqual(len(cache), 0)

    def test_errors_propagate_and_are_not_cached(self):
        calls = []

        def failing(query, registry):
            calls.append(query)
            raise ValueError("registry unavailable")

        cache = ResolutionCache([], resolver=failing)
        with self.assertLogs("oj_match.cache", level="WARNING"):
            with self.assertRaises(ValueError):
                cache.resolve("a")
            with self.assertRaises(ValueError):
                cache.resolve("a")
        self.assertEqual(len(calls), 2)


class TestSingleFlight(unittest.TestCase):
    def test_concurrent_callers_share_one_computation(self):
        entered = threading.Event()
        release = threading.Event()
        calls = []

        def slow(query, registry):
            calls.append(query)
            entered.set()
            release.wait(5)
            return resolve(query, registry)

        cache = ResolutionCache(["DAM - Jundiaí"], resolver=slow)
        results = []
        lock = threading.Lock()

        def worker():
            result = cache.resolve("dam jundiai")
            with lock:
                results.append(result)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        self.assertTrue(entered.wait(5))
        release.set()
        for thread in threads:
            thread.join(5)

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(results), 5)
        self.assertTrue(all(r is results[0] for r in results))

    def test_result_computed_before_registry_change_is_not_stored(self):
        entered = threading.Event()
        release = threading.Event()
        calls = []

        def slow(query, registry):
            calls.append(registry)
            if len(calls) == 1:
                entered.set()
                release.wait(5)
            return resolve(query, registry)

        cache = ResolutionCache(["DAM - Jundiaí"], resolver=slow)
        stale = []
        thread = threading.Thread(target=lambda: stale.append(cache.resolve("dam jundiai")))
        thread.start()
        self.assertTrue(entered.wait(5))
        cache.update_registry(["LIQ1 - Campinas"])
        release.set()
        thread.join(5)

        self.assertTrue(stale[0].found)
        fresh = cache.resolve("dam jundiai")
        self.assertFalse(fresh.found)
        self.assertEqual(calls[-1], ("LIQ1 - Campinas",))

    def test_waiters_see_leader_interruption(self):
        class Interrupted(BaseException):
            pass

        entered = threading.Event()
        release = threading.Event()

        def interrupted(query, registry):
            entered.set()
            release.wait(5)
            raise Interrupted()

        cache = ResolutionCache(["DAM - Jundiaí"], resolver=interrupted)
        outcomes = []
        lock = threading.Lock()

        def worker():
            try:
                outcome = cache.resolve("dam jundiai")
            except BaseException as exc:
                outcome = exc
            with lock:
                outcomes.append(outcome)

        leader = threading.Thread(target=worker)
        leader.start()
        self.assertTrue(entered.wait(5))
        waiter = threading.Thread(target=worker)
        waiter.start()
        time.sleep(0.1)
        with self.assertLogs("oj_match.cache", level="WARNING"):
            release.set()
            leader.join(5)
            waiter.join(5)

        self.assertEqual(len(outcomes), 2)
        self.assertTrue(all(isinstance(o, Interrupted) for o in outcomes))
        self.assertEqual(len(cache), 0)


if __name__ == "__main__":
    unittest.main()
