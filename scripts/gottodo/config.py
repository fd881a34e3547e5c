"""
Runtime settings, resolved from CLI flags, then environment, then defaults.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from gottodo.store import DEFAULT_DATA_FILE

# Idle redraw interval in seconds
TICK_INTERVAL = 0.2

ENV_FILE = "GOTTODO_FILE"
ENV_DEBUG = "GOTTODO_DEBUG"
ENV_LOG_FILE = "GOTTODO_LOG_FILE"


def _truthy_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one run."""

    data_file: Path = DEFAULT_DATA_FILE
    debug: bool = False
    log_file: Path | None = None
    tick_interval: float = TICK_INTERVAL

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        env = os.environ if environ is None else environ

        data_file = args.file or env.get(ENV_FILE) or DEFAULT_DATA_FILE
        log_file = args.log_file or env.get(ENV_LOG_FILE) or None
        debug = bool(args.debug) or _truthy_env(env.get(ENV_DEBUG))

        return cls(
            data_file=Path(data_file),
            debug=debug,
            log_file=Path(log_file) if log_file else None,
        )
