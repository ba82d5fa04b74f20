from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Iterable, Literal

Linkage = Literal['isolated', 'caller']

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}

# Defaults
_DEFAULT_RECURSION_LIMIT = 10_000


@dataclass(frozen=True)
class Semantics:
    """Policy switches where the language admits more than one reading.

    linkage:        'isolated' - a callee starts from its parameters only;
                    'caller'   - a callee starts from a copy of the caller's locals.
    eager_or:       evaluate both operands of `or` (no short-circuit).
    live_iteration: `for` reads each element when it is reached instead of
                    iterating a snapshot taken at loop start.
    """
    linkage: Linkage = 'isolated'
    eager_or: bool = False
    live_iteration: bool = False

    @classmethod
    def default(cls) -> Semantics:
        return cls()

    @classmethod
    def reference(cls) -> Semantics:
        """Compatibility mode: caller-scope linkage, eager `or`, live iteration."""
        return cls(linkage='caller', eager_or=True, live_iteration=True)


PRESETS = {
    'default': Semantics.default,
    'reference': Semantics.reference,
}


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{var} must be a boolean flag, got {raw!r}")


def choice_from_env(var: str, choices: Iterable[str], default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    allowed = list(choices)
    if value not in allowed:
        raise ValueError(f"{var} must be one of {', '.join(allowed)}, got {raw!r}")
    return value


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_semantics() -> Semantics:
    """Semantics from MINIPY_SEMANTICS, refined by the per-switch variables."""
    preset = choice_from_env('MINIPY_SEMANTICS', PRESETS, 'default')
    base = PRESETS[preset]()
    return replace(
        base,
        linkage=choice_from_env('MINIPY_LINKAGE', ('isolated', 'caller'), base.linkage),
        eager_or=flag_from_env('MINIPY_EAGER_OR', base.eager_or),
        live_iteration=flag_from_env('MINIPY_LIVE_ITERATION', base.live_iteration),
    )


def get_recursion_limit() -> int:
    return int_from_env('MINIPY_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)
