"""Turning a suite object into an ordered list of test procedures."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

RESERVED = frozenset({"procedures"})


@dataclass(frozen=True)
class Procedure:
    name: str
    func: Callable[[], Any]


@runtime_checkable
class ProcedureSource(Protocol):
    """A suite that lists its own test procedures."""

    def procedures(self) -> list[Procedure]: ...


def _takes_no_arguments(func: Callable[..., Any]) -> bool:
    try:
        return len(inspect.signature(func).parameters) == 0
    except (TypeError, ValueError):
        return False


def collect_procedures(suite: object) -> list[Procedure]:
    """Build the registry from the suite's public zero-argument methods.

    Methods are returned in declaration order, base classes first.  An
    override keeps the position of the method it replaces.  ``each`` is left
    out only when it is the lifecycle hook.
    """
    reserved = (RESERVED | {"each"}) if lifecycle_hook(suite) is not None else RESERVED
    names: dict[str, None] = {}
    for cls in reversed(type(suite).__mro__):
        if cls is object:
            continue
        for name, raw in vars(cls).items():
            if name.startswith("_") or name in reserved:
                continue
            if inspect.isfunction(raw) or isinstance(raw, (staticmethod, classmethod)):
                names.setdefault(name, None)

    procedures = []
    for name in names:
        func = getattr(suite, name)
        if callable(func) and _takes_no_arguments(func):
            procedures.append(Procedure(name, func))
    return procedures


def procedures_of(suite: object) -> list[Procedure]:
    if isinstance(suite, ProcedureSource):
        return list(suite.procedures())
    return collect_procedures(suite)


def lifecycle_hook(suite: object) -> Callable[[Callable[[], None]], Any] | None:
    """Return ``suite.each`` when it takes exactly one callback argument."""
    each = getattr(suite, "each", None)
    if each is None or not callable(each):
        return None
    try:
        if len(inspect.signature(each).parameters) != 1:
            return None
    except (TypeError, ValueError):
        return None
    return each
