"""Tests for the PatternCache."""

import logging
import threading
from uuid import uuid4

from recova.domain.classification.services import PatternCache, PatternField


class TestPatternCache:
    """Test cases for PatternCache."""

    def test_compiles_case_insensitive(self):
        """Test that compiled patterns ignore case."""
        cache = PatternCache()

        pattern = cache.compiled_pattern((uuid4(), PatternField.DESCRIPTION), "essence")

        assert pattern is not None
        assert pattern.search("ACHAT ESSENCE")

    def test_memoizes_compiled_pattern(self):
        """Test that the same key returns the same compiled object."""
        cache = PatternCache()
        key = (uuid4(), PatternField.ACCOUNT)

        first = cache.compiled_pattern(key, "^625")
        second = cache.compiled_pattern(key, "^625")

        assert first is second
        assert len(cache) == 1
        assert key in cache

    def test_fields_are_cached_separately(self):
        """Test that account and description patterns do not collide."""
        cache = PatternCache()
        rule_id = uuid4()

        account = cache.compiled_pattern((rule_id, PatternField.ACCOUNT), "^6251")
        description = cache.compiled_pattern(
            (rule_id, PatternField.DESCRIPTION),
            "carburant",
        )

        assert account is not description
        assert len(cache) == 2

    def test_invalid_pattern_returns_none_and_logs_once(self, caplog):
        """Test that a malformed pattern is remembered as a failure."""
        cache = PatternCache()
        key = (uuid4(), PatternField.DESCRIPTION)

        with caplog.at_level(logging.ERROR):
            first = cache.compiled_pattern(key, "[")
            second = cache.compiled_pattern(key, "[")

        assert first is None
        assert second is None
        assert key in cache
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1

    def test_invalidate_all(self):
        """Test that invalidation forgets every compiled pattern."""
        cache = PatternCache()
        key = (uuid4(), PatternField.DESCRIPTION)
        stale = cache.compiled_pattern(key, "essence")

        cache.invalidate_all()
        fresh = cache.compiled_pattern(key, "gasoil")

        assert len(cache) == 1
        assert stale.pattern == "essence"
        assert fresh is not None
        assert fresh.pattern == "gasoil"

    def test_concurrent_compilation_yields_one_entry(self):
        """Test that racing threads agree on a single cached pattern."""
        cache = PatternCache()
        key = (uuid4(), PatternField.DESCRIPTION)
        results = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(cache.compiled_pattern(key, "restaurant|repas"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 1
        assert len(results) == 8
        assert all(r is not None and r.pattern == "restaurant|repas" for r in results)

    def test_invalidation_racing_with_lookups(self):
        """Test that invalidating while threads compile never corrupts entries."""
        cache = PatternCache()
        patterns = {
            (uuid4(), PatternField.DESCRIPTION): f"carburant{i}|essence{i}"
            for i in range(4)
        }
        patterns[(uuid4(), PatternField.ACCOUNT)] = "["
        errors = []
        mismatches = []
        barrier = threading.Barrier(5)

        def reader() -> None:
            barrier.wait()
            try:
                for _ in range(200):
                    for key, text in patterns.items():
                        compiled = cache.compiled_pattern(key, text)
                        if text == "[":
                            if compiled is not None:
                                mismatches.append((key, compiled))
                        elif compiled is None or compiled.pattern != text:
                            mismatches.append((key, compiled))
            except Exception as e:  # NOQA: BLE001
                errors.append(e)

        def invalidator() -> None:
            barrier.wait()
            try:
                for _ in range(200):
                    cache.invalidate_all()
            except Exception as e:  # NOQA: BLE001
                errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        threads.append(threading.Thread(target=invalidator))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert mismatches == []
        assert len(cache) <= len(patterns)
