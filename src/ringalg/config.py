from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from ringalg.utility import UserInputError, parse_ring
from ringalg.workspace import ensure_workspace_seeded, workspace_dir

DEFAULTS: dict[str, dict[str, Any]] = {
    "SERIES": {"RING": "i64", "DEGREE": 8, "VARIABLE": "x"},
    "DISPLAY": {"FLOAT_FORMAT": ".17g", "SHOW_COEFFICIENTS": True, "DIGITS": 0},
    "BEHAVIOUR": {"DEBUG": False},
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


def _packaged_profile(name: str) -> Path | None:
    ref = pkg_files("ringalg") / "profiles" / f"{name}.toml"
    with as_file(ref) as real:
        path = Path(real)
        return path if path.is_file() else None


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except (OSError, toml.TOMLDecodeError) as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _merge_defaults(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for section, values in DEFAULTS.items():
        given = data.get(section) or {}
        if not isinstance(given, dict):
            raise UserInputError(f"[{section}] must be a table, got {type(given).__name__}")
        out[section] = {**values, **given}
    for section, values in data.items():
        out.setdefault(section, values)
    return out


def _validate(data: dict[str, Any], source: str) -> None:
    series = data["SERIES"]
    degree = series["DEGREE"]
    if isinstance(degree, bool) or not isinstance(degree, int) or degree < 0:
        raise UserInputError(f"{source}: SERIES.DEGREE must be a non-negative integer, got {degree!r}")
    try:
        parse_ring(series["RING"])
    except UserInputError as e:
        raise UserInputError(f"{source}: SERIES.RING: {e}") from None
    var = series["VARIABLE"]
    if not isinstance(var, str) or not var.isidentifier():
        raise UserInputError(f"{source}: SERIES.VARIABLE must be an identifier, got {var!r}")
    digits = data["DISPLAY"]["DIGITS"]
    if isinstance(digits, bool) or not isinstance(digits, int) or digits < 0:
        raise UserInputError(f"{source}: DISPLAY.DIGITS must be a non-negative integer, got {digits!r}")


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Return the list of available profile *names* (filename stems)."""
    ensure_workspace_seeded()
    pdir = _profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for all workspace profiles.
    Profiles lacking [_PROFILE_] get "(no description)".
    """
    items: list[tuple[str, str]] = []
    for p in _profiles_dir().glob("*.toml"):
        try:
            raw = _load_toml(p)
        except UserInputError:
            # listing is best-effort; fall back to the filename
            items.append((p.stem, "(unreadable)"))
            continue
        _, nm, desc = _split_profile_data(raw, p.stem)
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name).exists() or _packaged_profile(name) is not None


def settings_from_dict(raw: dict[str, Any], name: str = "custom", source: Path | None = None) -> Settings:
    """Build validated Settings from an already-parsed TOML dict."""
    data, resolved_name, description = _split_profile_data(raw, name)
    data = _merge_defaults(data)
    _validate(data, source.name if source else resolved_name)
    return Settings(data=data, name=resolved_name, description=description, _source=source)


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'): the workspace copy first,
    then the packaged one. Missing keys fall back to DEFAULTS.
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if not path.exists():
        packaged = _packaged_profile(name)
        if packaged is None:
            raise UserInputError(f"profile '{name}' not found in {_profiles_dir()}")
        path = packaged

    return settings_from_dict(_load_toml(path), path.stem, path)


def _current_profile_path() -> Path:
    p = _profiles_dir()
    p.mkdir(parents=True, exist_ok=True)
    return p / ".current"


def read_current_profile() -> str | None:
    try:
        s = _current_profile_path().read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return s[:-5] if s.lower().endswith(".toml") else (s or None)


def write_current_profile(name: str) -> None:
    nm = (name or "").strip()
    if nm.lower().endswith(".toml"):
        nm = nm[:-5]
    _current_profile_path().write_text(nm, encoding="utf-8")
