"""Load cybertag settings from TOML (e.g. cybertag.toml).

Config file is looked up in order:
  1. Path in CYBERTAG_CONFIG env var (if set)
  2. cybertag.toml in the cybertag package directory
  3. cybertag.toml in the current working directory

The first file that exists and parses wins. If none does, built-in defaults
are used.

Example:

    [model]
    location = "/opt/models/cyber-perceptron.json"

    [assembler]
    merge_policy = "legacy"
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from cybertag.assembler import MergePolicy

CONFIG_ENV_VAR = "CYBERTAG_CONFIG"
CONFIG_FILE_NAME = "cybertag.toml"
DEFAULT_MODEL_LOCATION = "cyber-perceptron.json"


class CybertagSettings(BaseModel, frozen=True):
    """Runtime settings for the annotator."""

    model_location: str = Field(
        default=DEFAULT_MODEL_LOCATION,
        description="Embedded resource name or filesystem path of the classifier model.",
    )
    merge_policy: MergePolicy = Field(
        default=MergePolicy.LEGACY,
        description="Span merge policy used by the assembler.",
    )


def _default_config_paths() -> list[Path]:
    """Return paths to check for cybertag.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path(__file__).resolve().parent / CONFIG_FILE_NAME)
    paths.append(Path.cwd() / CONFIG_FILE_NAME)
    return paths


def _settings_from_data(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    model = data.get("model")
    if isinstance(model, dict) and isinstance(model.get("location"), str):
        out["model_location"] = model["location"]
    assembler = data.get("assembler")
    if isinstance(assembler, dict) and assembler.get("merge_policy") in {p.value for p in MergePolicy}:
        out["merge_policy"] = assembler["merge_policy"]
    return out


def load_cybertag_config(paths: list[Path] | None = None) -> CybertagSettings:
    """Load settings from the first readable TOML file.

    Args:
        paths: Candidate files, checked in order. Defaults to the env var,
            package directory and working directory lookups.

    Returns:
        Settings with file values layered over the defaults. Unknown keys and
        values of the wrong type are ignored.
    """
    for path in paths if paths is not None else _default_config_paths():
        if path.is_file():
            try:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, ValueError):
                continue
            return CybertagSettings(**_settings_from_data(data))
    return CybertagSettings()
