"""Configuration read from environment variables.

There is only one knob: where the proc filesystem is mounted.  It
defaults to ``/proc`` and can be pointed elsewhere (a container's
``/host/proc``, or a fixture tree in tests) with
``PY_HEAPSIZE_PROC_ROOT``.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

PROC_ROOT_VAR = "PY_HEAPSIZE_PROC_ROOT"
DEFAULT_PROC_ROOT = Path("/proc")


class ConfigError(Exception):
    """Raise when an environment setting is unusable."""


@dataclass(frozen=True)
class HeapSizeConfig:
    """Settings for locating maps listings."""

    proc_root: Path = DEFAULT_PROC_ROOT
    """Mount point of the proc filesystem."""

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "HeapSizeConfig":
        """Build a config from *environ* (``os.environ`` by default).

        Raises:
            ConfigError: If ``PY_HEAPSIZE_PROC_ROOT`` is set but blank.

        """
        env = os.environ if environ is None else environ
        raw = env.get(PROC_ROOT_VAR)
        if raw is None:
            return cls()
        if not raw.strip():
            msg = f"{PROC_ROOT_VAR} is set but empty"
            raise ConfigError(msg)
        return cls(proc_root=Path(raw))
