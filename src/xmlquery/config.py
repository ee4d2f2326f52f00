"""Configuration model for xmlquery.

Provides ``XMLQueryConfig`` with the parser options used by the default lxml
engine.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

import yaml
from pydantic import BaseModel


class XMLQueryConfig(BaseModel):
    """All tunable parameters with sensible defaults for parsing and querying."""

    # --- Parsing ---
    remove_blank_text: bool = True
    validate_dtd: bool = True

    # --- Security / Resource Limits ---
    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False

    # --- Document metadata ---
    base_path: str | None = None

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @classmethod
    def from_file(cls, path: str) -> XMLQueryConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Any keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            with file_path.open(encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with file_path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        return cls.model_validate(data or {})
