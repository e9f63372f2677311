"""Push-notification device token storage."""

from abc import ABC, abstractmethod


class PushTokenStore(ABC):
    """Keyed store of device tokens, one set per customer email."""

    @abstractmethod
    async def get(self, key: str) -> set[str]:
        """Return the tokens registered for a key (empty if none)."""
        ...

    @abstractmethod
    async def add(self, key: str, value: str) -> None:
        """Register a token for a key."""
        ...

    @abstractmethod
    async def discard(self, key: str, value: str) -> None:
        """Forget a token, e.g. after the push service rejects it."""
        ...


class InMemoryPushTokenStore(PushTokenStore):
    """Process-local store. Lost on restart and not shared between workers."""

    def __init__(self) -> None:
        self._tokens: dict[str, set[str]] = {}

    async def get(self, key: str) -> set[str]:
        return set(self._tokens.get(key, ()))

    async def add(self, key: str, value: str) -> None:
        self._tokens.setdefault(key, set()).add(value)

    async def discard(self, key: str, value: str) -> None:
        tokens = self._tokens.get(key)
        if tokens is None:
            return
        tokens.discard(value)
        if not tokens:
            del self._tokens[key]
