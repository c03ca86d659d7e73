"""Service target configuration (``swagger-targets.json``) and server settings.

A targets file maps short aliases to API descriptions::

    {
      "petstore": "https://petstore.swagger.io/v2/swagger.json",
      "local": {"spec": "./specs/local.yaml", "baseUrl": "http://localhost:8080"}
    }

Relative ``spec`` paths are resolved against the directory containing the
targets file; URLs are left untouched.

* **Discovery** -- :func:`find_targets_file` searches, in order, an
  explicit ``--config`` path (a directory means
  ``<dir>/swagger-targets.json``), the ``SWAGGER_MCP_CONFIG`` environment
  variable, ``./swagger-targets.json``, and
  ``~/.swagger-mcp/swagger-targets.json``. The first existing file wins.
* **Loading** -- :func:`load_targets` parses and validates a file into
  :class:`~swagger_mcp.models.ServiceTarget` models.
* **Registry** -- :class:`ServiceRegistry` caches the loaded targets and
  resolves a name to either a configured alias or a direct URL / path.
* **Settings** -- :func:`load_settings` reads
  :class:`~swagger_mcp.models.ServerSettings` from the environment.
"""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swagger_mcp.exceptions import ConfigError, NotFoundError
from swagger_mcp.models import ServerSettings, ServiceTarget
from swagger_mcp.output import debug, warning
from swagger_mcp.parser.loader import is_url

_APP_NAME = "swagger-mcp"
TARGETS_FILENAME = "swagger-targets.json"
CONFIG_ENV_VAR = "SWAGGER_MCP_CONFIG"
TIMEOUT_ENV_VAR = "SWAGGER_MCP_TIMEOUT_MS"


# --- Paths ---


def get_home_dir() -> Path:
    """Return ``~/.swagger-mcp`` (not created)."""
    return Path.home() / f".{_APP_NAME}"


def get_logs_dir() -> Path:
    """Return the crash-log directory, creating it if necessary."""
    path = get_home_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _as_targets_file(candidate: str | Path) -> Path:
    path = Path(candidate).expanduser()
    if path.is_dir():
        return path / TARGETS_FILENAME
    return path


def candidate_paths(explicit: Optional[str] = None) -> list[Path]:
    """Return the targets-file search path, highest precedence first."""
    candidates: list[Path] = []
    if explicit:
        candidates.append(_as_targets_file(explicit))
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        candidates.append(_as_targets_file(env_path))
    candidates.append(Path.cwd() / TARGETS_FILENAME)
    candidates.append(get_home_dir() / TARGETS_FILENAME)
    return candidates


def find_targets_file(explicit: Optional[str] = None) -> Optional[Path]:
    """Return the first existing targets file on the search path, or ``None``."""
    for candidate in candidate_paths(explicit):
        if candidate.is_file():
            return candidate
    return None


# --- Loading ---


def load_targets(path: Path) -> dict[str, ServiceTarget]:
    """Parse a targets file.

    Args:
        path: The ``swagger-targets.json`` file to read.

    Returns:
        Targets keyed by alias, in file order.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, is not a
            JSON object, or an entry is neither a string nor an object with
            a string ``spec``.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read service config at {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in service config at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid service config at {path}: expected a JSON object mapping names to specs"
        )

    targets: dict[str, ServiceTarget] = {}
    for name, entry in data.items():
        targets[name] = _parse_entry(name, entry, path)
    return targets


def _parse_entry(name: str, entry: Any, path: Path) -> ServiceTarget:
    if isinstance(entry, str):
        entry = {"spec": entry}
    if not isinstance(entry, dict):
        raise ConfigError(
            f"Invalid service '{name}' in {path}: expected a string or an object with 'spec'"
        )
    try:
        target = ServiceTarget.model_validate({**entry, "name": name})
    except ValidationError as exc:
        raise ConfigError(f"Invalid service '{name}' in {path}: {exc}") from exc

    target.spec = _resolve_spec_location(target.spec, path.parent)
    return target


def _resolve_spec_location(spec: str, config_dir: Path) -> str:
    if is_url(spec):
        return spec
    spec_path = Path(spec).expanduser()
    if not spec_path.is_absolute():
        spec_path = config_dir / spec_path
    return os.path.normpath(str(spec_path))


# --- Registry ---


@dataclass(frozen=True)
class ResolvedService:
    """Outcome of :meth:`ServiceRegistry.resolve`.

    Attributes:
        source: URL or file path of the description to load.
        alias: The configured alias, or ``None`` for a direct source.
        base_url: The alias's configured ``baseUrl``, if any.
    """

    source: str
    alias: Optional[str] = None
    base_url: Optional[str] = None

    @property
    def is_alias(self) -> bool:
        return self.alias is not None


class ServiceRegistry:
    """Configured service aliases, loaded lazily and cached.

    Args:
        explicit_path: The ``--config`` value, if one was given.
    """

    def __init__(self, explicit_path: Optional[str] = None) -> None:
        self._explicit_path = explicit_path
        self._path: Optional[Path] = None
        self._targets: Optional[dict[str, ServiceTarget]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[Path]:
        """The targets file in use (``None`` when none was found)."""
        self.targets()
        return self._path

    def targets(self) -> dict[str, ServiceTarget]:
        """Return the configured targets, loading them on first use.

        Raises:
            ConfigError: If the targets file exists but is invalid.
        """
        with self._lock:
            if self._targets is None:
                self._targets = self._load()
            return self._targets

    def reload(self) -> dict[str, ServiceTarget]:
        """Discard the cached targets and read the file again.

        On failure the previously loaded targets are kept and the error is
        raised.
        """
        with self._lock:
            self._targets = self._load()
            return self._targets

    def list_services(self) -> list[ServiceTarget]:
        """Configured targets in file order."""
        return list(self.targets().values())

    def resolve(self, name: str) -> ResolvedService:
        """Resolve *name* to a configured alias or a direct URL / file path.

        Raises:
            NotFoundError: If *name* is neither a configured alias, a URL,
                nor an existing file.
        """
        targets = self.targets()
        target = targets.get(name)
        if target is not None:
            return ResolvedService(source=target.spec, alias=name, base_url=target.base_url)

        if is_url(name) or Path(name).expanduser().is_file():
            return ResolvedService(source=name)

        available = ", ".join(targets) if targets else "none configured"
        raise NotFoundError(
            f"Unknown service '{name}'. Available services: {available}. "
            "Pass a URL or file path to connect directly."
        )

    def _load(self) -> dict[str, ServiceTarget]:
        path = find_targets_file(self._explicit_path)
        if self._explicit_path and (path is None or path != _as_targets_file(self._explicit_path)):
            warning(f"Service config not found at {self._explicit_path}")
        self._path = path
        if path is None:
            debug("No swagger-targets.json found; only direct URLs and paths can be selected")
            return {}
        targets = load_targets(path)
        debug(f"Loaded {len(targets)} service(s) from {path}")
        return targets


# --- Settings ---


def load_settings() -> ServerSettings:
    """Build :class:`~swagger_mcp.models.ServerSettings` from the environment.

    Raises:
        ConfigError: If ``SWAGGER_MCP_TIMEOUT_MS`` is not a positive integer.
    """
    data: dict[str, Any] = {}
    raw_timeout = os.environ.get(TIMEOUT_ENV_VAR, "")
    if raw_timeout:
        data["timeout_ms"] = raw_timeout
    try:
        return ServerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {TIMEOUT_ENV_VAR}={raw_timeout!r}: {exc}") from exc
