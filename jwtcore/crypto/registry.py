"""Immutable lookup table from algorithm name to signing method."""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from jwtcore.crypto.methods import ALL_METHODS, SigningMethod


class MethodRegistry:
    """Read-only mapping of ``alg`` names to signing methods.

    Registration returns a new registry, so a registry shared between
    parsers never changes underneath them.
    """

    def __init__(self, methods: Iterable[SigningMethod] = ()) -> None:
        table: dict[str, SigningMethod] = {}
        for method in methods:
            _add(table, method)
        self._methods = MappingProxyType(table)

    def register(self, method: SigningMethod) -> "MethodRegistry":
        """Return a registry that also contains ``method``."""
        existing = self._methods.get(method.name)
        if existing is not None:
            _add({method.name: existing}, method)
            return self
        return MethodRegistry([*self._methods.values(), method])

    def lookup(self, name: str) -> SigningMethod | None:
        """Return the method registered under ``name``, if any."""
        return self._methods.get(name)

    def names(self) -> list[str]:
        """Return every registered algorithm name."""
        return list(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)


def _add(table: dict[str, SigningMethod], method: SigningMethod) -> None:
    existing = table.get(method.name)
    if existing is not None and existing != method:
        raise ValueError(f"Signing method {method.name!r} is already registered")
    table[method.name] = method


DEFAULT_REGISTRY = MethodRegistry(ALL_METHODS)


def get_signing_method(name: str) -> SigningMethod | None:
    """Look up ``name`` in the default registry."""
    return DEFAULT_REGISTRY.lookup(name)
