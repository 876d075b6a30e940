"""
Allow-list sources.

A source supplies the current set of valid identifiers for one rule.
Rules call ``current_values`` on every validation, so a source must
reflect additions and removals immediately and should enumerate
in-memory state only.
"""

import threading
from operator import attrgetter
from typing import Any, Callable, FrozenSet, Iterable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class AllowListSource(Protocol):
    """Read-only supplier of the values one rule allows."""

    def current_values(self) -> FrozenSet[str]:
        """Return a live snapshot of the allowed values."""
        ...


class StaticAllowListSource:
    """
    Allow-list backed by a fixed set.

    ``replace`` swaps the whole set at once, which is how tests and
    simple hosts model providers appearing and disappearing.
    """

    def __init__(self, values: Iterable[str] = ()):
        self._values: FrozenSet[str] = frozenset(values)
        self._lock = threading.Lock()

    def current_values(self) -> FrozenSet[str]:
        with self._lock:
            return self._values

    def replace(self, values: Iterable[str]) -> None:
        """Replace the allowed values."""
        snapshot = frozenset(values)
        with self._lock:
            self._values = snapshot

    def __repr__(self) -> str:
        return f"StaticAllowListSource({sorted(self._values)!r})"


class ProviderAllowListSource:
    """
    Allow-list projected from a live list of providers.

    Args:
        providers: Callable returning the providers currently available
        key: Attribute name or callable giving each provider's identifier
    """

    def __init__(
        self,
        providers: Callable[[], Iterable[Any]],
        key: Union[str, Callable[[Any], Optional[str]]],
    ):
        self.providers = providers
        self.key = attrgetter(key) if isinstance(key, str) else key

    def current_values(self) -> FrozenSet[str]:
        values = set()
        for provider in self.providers():
            value = self.key(provider)
            if value is not None:
                values.add(value)
        return frozenset(values)
