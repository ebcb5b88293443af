"""environment.py

Defines the runtime scope chain used by the interpreter.

Environment
    Allows values to be addressed by name, falling back to an
    enclosing Environment
"""

from typing import (
    MutableMapping,
    Optional,
)

from . import types as t

__all__ = [
    'Environment',
    'ValueMap',
]

ValueMap = MutableMapping[t.NameKey, t.Value]


class Environment:
    """Environments can be chained (with a reference to an enclosing
    Environment). Names can be redefined and reassigned.
    Existence checks should be carried out (using has()) before using
    the methods here.

    The global Environment has no enclosing Environment; every other
    Environment's chain ends at the global one.

    Methods
    -------
    has(name)
        returns True if the name exists in this environment,
        otherwise returns False
    define(name, value)
        binds name to value in this environment
    get(name)
        retrieves the value bound to the name
    assign(name, value)
        rebinds an existing name to value
    ancestor(distance)
        returns the environment distance links up the chain
    """
    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: Optional["Environment"] = None) -> None:
        self.values: ValueMap = {}
        self.enclosing = enclosing

    def __repr__(self) -> str:
        nameValuePairs = [f"{name}: {value!r}" for name, value in self.values.items()]
        return f"{{{', '.join(nameValuePairs)}}}"

    def has(self, name: t.NameKey) -> bool:
        return name in self.values

    def define(self, name: t.NameKey, value: t.Value) -> None:
        self.values[name] = value

    def get(self, name: t.NameKey) -> t.Value:
        return self.values[name]

    def assign(self, name: t.NameKey, value: t.Value) -> None:
        if name not in self.values:
            raise KeyError(name)
        self.values[name] = value

    def ancestor(self, distance: int) -> "Environment":
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env
