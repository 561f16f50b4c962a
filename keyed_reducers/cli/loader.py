"""
Load reducer mappings and action files for the CLI.

Targets are "package.module:attr" or "path/to/file.py:attr".
"""

import importlib
import importlib.util
import json
from pathlib import Path
from typing import Any, List, Mapping

from ..combine import CombinedReducer
from ..core.actions import Action


class LoadError(Exception):
    """Raised when a CLI target or action file cannot be loaded."""
    pass


def load_target(target: str) -> Any:
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise LoadError(f"Target must look like 'module:attr' or 'file.py:attr', got: {target}")

    if module_ref.endswith(".py"):
        path = Path(module_ref).resolve()
        if not path.is_file():
            raise LoadError(f"File not found: {module_ref}")
        spec = importlib.util.spec_from_file_location(path.stem, str(path))
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot import file: {module_ref}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        try:
            module = importlib.import_module(module_ref)
        except ImportError as e:
            raise LoadError(f"Cannot import module {module_ref}: {e}") from e

    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise LoadError(f"Module {module_ref} has no attribute {attr}") from e


def load_reducer_map(target: str) -> Mapping[str, Any]:
    """Resolve a target to a reducer mapping (a CombinedReducer yields its own mapping)."""
    obj = load_target(target)
    if isinstance(obj, CombinedReducer):
        return obj.reducers
    if not isinstance(obj, Mapping):
        raise LoadError(f"{target} is not a reducer mapping: {type(obj).__name__}")
    return obj


def read_actions(path: str) -> List[Action]:
    """Read one JSON action object per line. Blank lines are skipped."""
    actions: List[Action] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                actions.append(Action.from_dict(json.loads(line)))
            except (ValueError, TypeError, AttributeError) as e:
                raise LoadError(f"{path}:{lineno}: invalid action: {e}") from e
    return actions
