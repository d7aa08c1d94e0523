# src/ringalg/runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style

REQUIRED_MODULES = ("sympy", "gmpy2")

_MISSING = object()


@dataclass
class Runtime:
    """Active profile for the current context; the CLI installs one per run."""
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False

    def apply(self, settings: Any) -> None:
        """Install a config.Settings; BEHAVIOUR.DEBUG switches debug on or off."""
        self.profile_name = settings.name or "default"
        self.settings = dict(settings.as_dict())
        flag = self.get("BEHAVIOUR.DEBUG")
        if isinstance(flag, bool):
            self.debug = flag

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup such as 'SERIES.DEGREE'; a missing part gives `default`."""
        if not key:
            return default
        node: Any = self.settings
        for part in key.split("."):
            node = node.get(part, _MISSING) if isinstance(node, dict) else _MISSING
            if node is _MISSING:
                return default
        return node


_runtime: ContextVar[Runtime | None] = ContextVar("ringalg_runtime", default=None)


def current() -> Runtime:
    rt = _runtime.get()
    if rt is None:
        rt = reset()
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime in the current context and return it."""
    rt = Runtime()
    _runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Check that sympy and gmpy2 can be imported, without importing them.
    On a miss, print an install hint; the result is False only when strict.
    """
    missing = [name for name in REQUIRED_MODULES if find_spec(name) is None]
    if not missing:
        return True
    names = " ".join(missing)
    print(f"\n{Fore.RED}{Style.BRIGHT}Missing dependencies:{Style.RESET_ALL} {', '.join(missing)}")
    print(f"Install with: {Fore.YELLOW}pip install {names}{Style.RESET_ALL}")
    return not strict
