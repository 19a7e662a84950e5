"""Resolving ``path.py:Suite`` / ``package.module:Suite`` targets."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType

from expectify.errors import SuiteLoadError

SUITE_SUFFIX = "Suite"


def _import_target(module_ref: str) -> ModuleType:
    if module_ref.endswith(".py") or "/" in module_ref or "\\" in module_ref:
        path = Path(module_ref)
        if not path.exists():
            raise SuiteLoadError(f"suite file not found: {module_ref}")
        module_name = path.stem
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise SuiteLoadError(f"cannot import {module_ref}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise SuiteLoadError(f"cannot import {module_ref}: {e}") from e
        return module
    try:
        return importlib.import_module(module_ref)
    except ImportError as e:
        raise SuiteLoadError(f"cannot import {module_ref}: {e}") from e


def _instantiate(obj: object, target: str) -> object:
    if not inspect.isclass(obj):
        return obj
    try:
        return obj()
    except TypeError as e:
        raise SuiteLoadError(f"cannot instantiate {target}: {e}") from e


def load_suites(target: str) -> list[object]:
    """Return the suite instances named by ``target``.

    Without a ``:Name`` part every class defined in the module whose name
    ends in ``Suite`` is used, in definition order.
    """
    module_ref, _, attr = target.partition(":")
    module = _import_target(module_ref)

    if attr:
        try:
            obj = getattr(module, attr)
        except AttributeError as e:
            raise SuiteLoadError(f"{module_ref} has no attribute {attr}") from e
        return [_instantiate(obj, target)]

    suites = [
        _instantiate(obj, f"{module_ref}:{name}")
        for name, obj in vars(module).items()
        if inspect.isclass(obj)
        and name.endswith(SUITE_SUFFIX)
        and obj.__module__ == module.__name__
    ]
    if not suites:
        raise SuiteLoadError(f"no *{SUITE_SUFFIX} classes found in {module_ref}")
    return suites
