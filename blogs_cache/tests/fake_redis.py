"""
In-memory stand-in for the asyncio Redis client used by the tests.

Implements only the commands the cache layer issues, including the two
server-side scripts, and records every command it executes.
"""

import math
import re
import time
from typing import Any, Dict, List, Optional, Tuple

from redis.exceptions import ResponseError

from blogs_cache.cache.cache_service import DECR_FLOOR_SCRIPT, INCR_WITH_EXPIRY_SCRIPT


def _glob_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a Redis KEYS pattern, honoring backslash escapes."""
    parts = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[" and "]" in pattern[i + 1:]:
            end = pattern.index("]", i + 1)
            body = pattern[i + 1:end].replace("\\", "\\\\")
            parts.append("[" + body + "]")
            i = end + 1
            continue
        else:
            parts.append(re.escape(char))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


class FakeRedis:
    """Dict-backed Redis double with TTL support and a command log."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._expires: Dict[str, float] = {}
        self._clock_offset = 0.0
        self.commands: List[Tuple[Any, ...]] = []
        self.fail_with: Optional[Exception] = None
        self.closed = False

    # Test controls

    def advance(self, seconds: float) -> None:
        """Move the fake clock forward."""
        self._clock_offset += seconds

    def calls(self, name: str) -> List[Tuple[Any, ...]]:
        """Recorded invocations of one command."""
        return [command for command in self.commands if command[0] == name]

    def raw(self, key: str) -> Optional[str]:
        """Stored text for a key, bypassing the command log."""
        self._purge(key)
        return self._data.get(key)

    # Internals

    def _now(self) -> float:
        return time.monotonic() + self._clock_offset

    def _record(self, *command: Any) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.commands.append(command)

    def _purge(self, key: str) -> None:
        expires_at = self._expires.get(key)
        if expires_at is not None and expires_at <= self._now():
            self._data.pop(key, None)
            self._expires.pop(key, None)

    def _set(self, key: str, value: Any, seconds: Optional[int] = None) -> None:
        self._data[key] = str(value)
        if seconds is None:
            self._expires.pop(key, None)
        else:
            self._expires[key] = self._now() + seconds

    def _incr_by(self, key: str, amount: int) -> int:
        self._record("incrby" if amount != 1 else "incr", key, amount)
        self._purge(key)
        try:
            value = int(self._data.get(key, "0")) + amount
        except ValueError:
            raise ResponseError("value is not an integer or out of range")
        self._data[key] = str(value)
        return value

    def _expire(self, key: str, seconds: int) -> bool:
        self._record("expire", key, seconds)
        self._purge(key)
        if key not in self._data:
            return False
        self._expires[key] = self._now() + int(seconds)
        return True

    def _ttl(self, key: str) -> int:
        self._record("ttl", key)
        self._purge(key)
        if key not in self._data:
            return -2
        if key not in self._expires:
            return -1
        return math.ceil(self._expires[key] - self._now())

    # Commands

    async def ping(self) -> bool:
        self._record("ping")
        return True

    async def get(self, key: str) -> Optional[str]:
        self._record("get", key)
        self._purge(key)
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> bool:
        self._record("set", key, value)
        self._set(key, value)
        return True

    async def setex(self, key: str, seconds: int, value: Any) -> bool:
        self._record("setex", key, seconds, value)
        self._set(key, value, seconds)
        return True

    async def delete(self, *keys: str) -> int:
        self._record("delete", *keys)
        deleted = 0
        for key in keys:
            self._purge(key)
            if self._data.pop(key, None) is not None:
                deleted += 1
            self._expires.pop(key, None)
        return deleted

    async def keys(self, pattern: str) -> List[str]:
        self._record("keys", pattern)
        for key in list(self._data):
            self._purge(key)
        return sorted(key for key in self._data if _glob_regex(pattern).fullmatch(key))

    async def incr(self, key: str) -> int:
        return self._incr_by(key, 1)

    async def incrby(self, key: str, amount: int) -> int:
        return self._incr_by(key, amount)

    async def expire(self, key: str, seconds: int) -> bool:
        return self._expire(key, seconds)

    async def ttl(self, key: str) -> int:
        return self._ttl(key)

    async def eval(self, script: str, numkeys: int, *keys_and_args: Any) -> Any:
        self._record("eval", numkeys, *keys_and_args)
        keys = keys_and_args[:numkeys]
        args = keys_and_args[numkeys:]

        if script == INCR_WITH_EXPIRY_SCRIPT:
            count = self._incr_by(keys[0], 1)
            if count == 1:
                self._expire(keys[0], int(args[0]))
            return [count, self._ttl(keys[0])]

        if script == DECR_FLOOR_SCRIPT:
            value = self._incr_by(keys[0], -1)
            if value < 0:
                self._set(keys[0], 0)
                return 0
            return value

        raise ResponseError("NOSCRIPT unknown script")

    async def aclose(self) -> None:
        self.closed = True
