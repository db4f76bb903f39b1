"""Compiled regular-expression cache keyed by rule identity."""

from __future__ import annotations

import logging
import re
import threading
from enum import Enum
from typing import Optional, Union
from uuid import UUID

logger = logging.getLogger(__name__)


class PatternField(Enum):
    """Which of a rule's two pattern fields a compiled pattern belongs to."""

    ACCOUNT = "account"
    DESCRIPTION = "description"


PatternKey = tuple[UUID, PatternField]


class _CompileFailed:
    """Marks a pattern that failed to compile, so it is not retried."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<compile failed>"


COMPILE_FAILED = _CompileFailed()


class PatternCache:
    """Lazily compiles rule patterns and memoizes the outcome.

    Patterns are compiled case-insensitively (``str`` patterns are Unicode
    aware by default). A malformed pattern is logged once and cached as a
    failure; ``compiled_pattern`` then returns None for that key until the
    cache is invalidated.

    The cache does not track rule edits. Whoever changes a rule's patterns
    must call ``invalidate_all`` before the next classification.
    """

    def __init__(self) -> None:
        self._entries: dict[PatternKey, Union[re.Pattern[str], _CompileFailed]] = {}
        self._lock = threading.Lock()

    def compiled_pattern(
        self,
        cache_key: PatternKey,
        pattern_text: str,
    ) -> Optional[re.Pattern[str]]:
        with self._lock:
            entry = self._entries.get(cache_key)

        if entry is None:
            compiled = self._compile(cache_key, pattern_text)
            with self._lock:
                # First writer wins; both computed the same thing
                entry = self._entries.setdefault(cache_key, compiled)

        if isinstance(entry, _CompileFailed):
            return None
        return entry

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, cache_key: object) -> bool:
        with self._lock:
            return cache_key in self._entries

    @staticmethod
    def _compile(
        cache_key: PatternKey,
        pattern_text: str,
    ) -> Union[re.Pattern[str], _CompileFailed]:
        try:
            return re.compile(pattern_text, re.IGNORECASE)
        except re.error as e:
            rule_id, field = cache_key
            logger.error(
                "Invalid %s pattern for rule %s: %r (%s)",
                field.value,
                rule_id,
                pattern_text,
                e,
            )
            return COMPILE_FAILED
