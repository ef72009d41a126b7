"""A small named-parameter store with declare-once semantics and set callbacks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Parameter:
    """A parameter name together with a value."""

    name: str
    value: Any


class ParameterNotSetError(LookupError):
    """Raised when a parameter is undeclared or has no value."""


SetCallback = Callable[[list[Parameter]], bool]


class ParameterStore:
    """Holds declared parameters.

    ``overrides`` are values supplied from outside (e.g. configuration); when a
    parameter is declared, an override takes precedence over the declared default.
    """

    def __init__(self, overrides: Mapping[str, Any] | None = None) -> None:
        self._overrides = dict(overrides or {})
        self._values: dict[str, Any] = {}
        self._declared: set[str] = set()
        self._callbacks: list[SetCallback] = []

    def declare(self, name: str, default: Any = None) -> None:
        """Declare ``name`` unless already declared; ``None`` declares it without a value."""
        if name in self._declared:
            return
        self._declared.add(name)
        value = self._overrides.get(name, default)
        if value is not None:
            self._values[name] = value

    def is_declared(self, name: str) -> bool:
        return name in self._declared

    def get(self, name: str) -> Any:
        """Return the value of a declared parameter."""
        if name not in self._declared:
            raise ParameterNotSetError(f"parameter '{name}' is not declared")
        if name not in self._values:
            raise ParameterNotSetError(f"parameter '{name}' has no value")
        return self._values[name]

    def add_on_set_callback(self, callback: SetCallback) -> SetCallback:
        """Register a callback run before parameters are changed.

        A callback returning ``False`` rejects the change. The callback is returned
        so that it can later be passed to :meth:`remove_on_set_callback`.
        """
        self._callbacks.append(callback)
        return callback

    def remove_on_set_callback(self, callback: SetCallback) -> None:
        self._callbacks.remove(callback)

    def set_parameters(self, parameters: Iterable[Parameter]) -> bool:
        """Atomically set declared parameters; return whether the change was accepted."""
        parameters = list(parameters)
        for parameter in parameters:
            if parameter.name not in self._declared:
                raise ParameterNotSetError(f"parameter '{parameter.name}' is not declared")
        for callback in self._callbacks:
            if callback(parameters) is False:
                return False
        for parameter in parameters:
            self._values[parameter.name] = parameter.value
        return True


def search_and_get_param(store: ParameterStore, name: str, default: Any) -> Any:
    """Declare ``name`` with ``default`` if needed and return its value."""
    store.declare(name, default)
    return store.get(name)