"""Runtime environment loading helpers."""

from __future__ import annotations

import os
from typing import MutableMapping

from dotenv import dotenv_values, find_dotenv

_DISABLE_DOTENV_VALUES = {"1", "true", "yes", "on"}
ENV_PREFIX = "CRDKIT_"


def load_runtime_env(
    *,
    filename: str = ".env",
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Copy `CRDKIT_*` entries from the nearest .env into the environment.

    Variables that are already set win over the file. Returns the entries
    that were applied.
    """
    target = os.environ if environ is None else environ
    disabled = target.get("CRDKIT_DISABLE_DOTENV", "").strip().lower()
    if disabled in _DISABLE_DOTENV_VALUES:
        return {}

    dotenv_path = find_dotenv(filename=filename, usecwd=True)
    if not dotenv_path:
        return {}

    applied: dict[str, str] = {}
    for key, value in dotenv_values(dotenv_path).items():
        if not key.startswith(ENV_PREFIX) or value is None or key in target:
            continue
        target[key] = value
        applied[key] = value
    return applied
