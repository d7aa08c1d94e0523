# src/ringalg/registry.py
from __future__ import annotations

import inspect
import sys
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import Any

from colorama import Style

from ringalg.polynomial import Polynomial
from ringalg.runtime import current as _rt_current
from ringalg.taylor import taylor

COEFFICIENTS = "coefficients"
DERIVED = "derived"
PARITIES = (None, "even", "odd")


# ---------- Decorators (only tag the function; no side effects) ----------


def coefficients(*, label: str, description: str = "", parity: str | None = None,
                 aliases: tuple[str, ...] = (), reference: Callable[[Any], Any] | None = None):
    """
    Tag `fn(T, i)` as the coefficient of x^i of a named Taylor series.

    `reference` maps a sympy symbol to the exact function the series
    approximates; it is used for cross-checks only.
    """
    if parity not in PARITIES:
        raise ValueError(f"parity must be one of {PARITIES}, got {parity!r}")

    def deco(fn: Callable[[Any, int], Any]):
        fn.__is_series__ = True
        fn.kind = COEFFICIENTS
        fn.label = label
        fn.description = description
        fn.parity = parity
        fn.aliases = tuple(aliases)
        fn.reference = reference
        return fn
    return deco


def derived(*, label: str, description: str = "", aliases: tuple[str, ...] = (),
            reference: Callable[[Any], Any] | None = None):
    """Tag `fn(T, degree) -> Polynomial` as a series built from other series."""
    def deco(fn: Callable[[Any, int], Polynomial]):
        fn.__is_series__ = True
        fn.kind = DERIVED
        fn.label = label
        fn.description = description
        fn.parity = None
        fn.aliases = tuple(aliases)
        fn.reference = reference
        return fn
    return deco


# --------------------- Discovery → Index ----------------------


@dataclass
class SeriesIndex:
    builders: dict[str, Callable]              # label -> tagged function
    descriptions: dict[str, str]               # label -> short description
    kinds: dict[str, str]                      # label -> "coefficients" | "derived"
    aliases: dict[str, str] = field(default_factory=dict)   # alias -> label
    sources: dict[str, str] = field(default_factory=dict)   # label -> "ws:file.py" | "pkg:module"

    def labels(self) -> list[str]:
        return list(self.builders)

    def resolve(self, name: str) -> str:
        key = name.strip().lower()
        if key in self.builders:
            return key
        if key in self.aliases:
            return self.aliases[key]
        known = ", ".join(sorted(self.builders))
        raise ValueError(f"unknown series '{name}' (known: {known})")

    def __contains__(self, name: str) -> bool:
        key = name.strip().lower()
        return key in self.builders or key in self.aliases

    def get(self, name: str) -> Callable:
        return self.builders[self.resolve(name)]

    def build(self, name: str, T: Any, degree: int) -> Polynomial:
        label = self.resolve(name)
        fn = self.builders[label]
        t0 = time.perf_counter()
        if self.kinds[label] == COEFFICIENTS:
            poly = taylor(T, fn, degree)
        else:
            if degree < 0:
                raise ValueError(f"series degree must be non-negative, got {degree}")
            poly = fn(T, degree)
        if _rt_current().debug:
            dt = (time.perf_counter() - t0) * 1000.0
            print(f"{Style.DIM}[debug] built {label} (degree {degree} over {T}) in {dt:.2f} ms{Style.RESET_ALL}",
                  file=sys.stderr)
        return poly


@dataclass
class DiscoveryReport:
    ws_loaded: list[tuple[str, int]] = field(default_factory=list)         # (filename.py, count)
    ws_failed: list[tuple[str, str]] = field(default_factory=list)         # (filename.py, error)
    pkg_loaded: list[tuple[str, int]] = field(default_factory=list)        # (module.name, count)
    pkg_failed: list[tuple[str, str]] = field(default_factory=list)        # (module.name, error)

    added: list[tuple[str, str]] = field(default_factory=list)             # (label, source)
    skipped_duplicates: list[tuple[str, str, str]] = field(default_factory=list)  # (label, skipped, kept)
    module_labels: dict[str, list[str]] = field(default_factory=dict)      # source -> [labels]


def _is_series(obj) -> bool:
    return callable(obj) and getattr(obj, "__is_series__", False)


def _import_module_from_file(path: Path, name_hint: str):
    spec = spec_from_file_location(name_hint, path)
    if not spec or not spec.loader:
        raise ImportError(f"Cannot import {path}")
    mod = module_from_spec(spec)
    sys.modules[name_hint] = mod
    spec.loader.exec_module(mod)  # type: ignore[attr-defined]
    return mod


def _collect_from_module(mod) -> list[Callable]:
    # only functions defined in the module itself, not re-imported ones
    return [o for _, o in inspect.getmembers(mod)
            if _is_series(o) and getattr(o, "__module__", None) == mod.__name__]


def discover_with_report(workspace: Path | None = None) -> tuple[SeriesIndex, DiscoveryReport]:
    """
    Collect tagged series from `<workspace>/series/*.py` and then from the
    packaged `ringalg.series` modules. The first definition of a label wins,
    so workspace files override packaged series.
    """
    report = DiscoveryReport()
    idx = SeriesIndex(builders=OrderedDict(), descriptions={}, kinds={})

    def _add_from_module(mod, source_name: str) -> int:
        found = 0
        for fn in _collect_from_module(mod):
            label = fn.label.lower()
            if label in idx.builders:
                report.skipped_duplicates.append((label, source_name, idx.sources[label]))
                continue
            idx.builders[label] = fn
            idx.descriptions[label] = getattr(fn, "description", "")
            idx.kinds[label] = getattr(fn, "kind", COEFFICIENTS)
            idx.sources[label] = source_name
            for alias in getattr(fn, "aliases", ()):
                idx.aliases.setdefault(alias.lower(), label)
            report.added.append((label, source_name))
            report.module_labels.setdefault(source_name, []).append(label)
            found += 1
        return found

    # 1) Workspace (*.py)
    if workspace:
        ws_dir = workspace / "series"
        if ws_dir.is_dir():
            for file in sorted(ws_dir.glob("*.py")):
                if file.name == "__init__.py":
                    continue
                modname = f"_ringalg_user_series_{file.stem}"
                try:
                    mod = _import_module_from_file(file, modname)
                    cnt = _add_from_module(mod, f"ws:{file.name}")
                    report.ws_loaded.append((file.name, cnt))
                except Exception as e:
                    report.ws_failed.append((file.name, f"{type(e).__name__}: {e}"))

    # 2) Packaged (ringalg.series.*)
    try:
        pkg_dir = pkg_files("ringalg") / "series"
        with as_file(pkg_dir) as real:
            for file in sorted(Path(real).glob("*.py")):
                if file.name == "__init__.py":
                    continue
                modname = f"ringalg.series.{file.stem}"
                try:
                    mod = import_module(modname)
                    cnt = _add_from_module(mod, f"pkg:{modname}")
                    report.pkg_loaded.append((modname, cnt))
                except Exception as e:
                    report.pkg_failed.append((modname, f"{type(e).__name__}: {e}"))
    except Exception as e:
        report.pkg_failed.append(("ringalg.series", f"{type(e).__name__}: {e}"))

    # aliases never shadow a real label
    idx.aliases = {a: lbl for a, lbl in idx.aliases.items() if a not in idx.builders}
    return idx, report


def discover(workspace: Path | None = None) -> SeriesIndex:
    """Discover series from workspace and package; workspace overrides package by label."""
    idx, _ = discover_with_report(workspace)
    return idx


def build_series(name: str, T: Any, degree: int, workspace: Path | None = None) -> Polynomial:
    """One-shot helper: discover and build a named series."""
    return discover(workspace).build(name, T, degree)
