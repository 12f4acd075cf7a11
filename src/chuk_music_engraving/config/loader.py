"""
Layout config loader - discovers and loads layout parameter presets.

Presets can come from:
1. Built-in library (shipped with package)
2. Project presets (a user directory of YAML files)

A preset file names a set of LayoutParams overrides:

    name: compact
    description: Tighter spacing for exercise sheets
    params:
      staff_space: 6.0
      minimum_note_spacing: 1.4
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from chuk_music_engraving.layout.params import LayoutParams

logger = logging.getLogger(__name__)


class PresetMetadata(BaseModel):
    """Lightweight preset info for listing."""

    name: str = Field(..., description="Preset name")
    description: str = Field("", description="What the preset is for")
    source: str = Field("library", description="'library' or 'project'")

    model_config = {"frozen": True}


class LayoutConfigLoader:
    """
    Discovers and loads layout presets.

    Presets are loaded from YAML files in the library and project directories.
    Project presets override library presets with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the loader.

        Args:
            library_path: Path to built-in preset library
            project_path: Path to project presets directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, LayoutParams] = {}

    def list_presets(self) -> list[PresetMetadata]:
        """
        List all available presets, sorted by name.

        Project presets take precedence over library presets.
        """
        presets: dict[str, PresetMetadata] = {}

        for source, directory in (("library", self.library_path), ("project", self.project_path)):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                data = self._read_yaml(path)
                if data is None:
                    continue
                name = data.get("name", path.stem)
                presets[name] = PresetMetadata(
                    name=name,
                    description=data.get("description", ""),
                    source=source,
                )

        return [presets[name] for name in sorted(presets)]

    def get_params(self, name: str) -> LayoutParams | None:
        """
        Get layout parameters for a preset.

        Args:
            name: Preset name

        Returns:
            LayoutParams if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            path = directory / f"{name}.yaml"
            if not path.exists():
                continue
            params = self._load_preset_file(path)
            if params is not None:
                logger.debug("Loaded layout preset %s from %s", name, path)
                self._cache[name] = params
                return params

        logger.debug("Layout preset %s not found", name)
        return None

    def _read_yaml(self, path: Path) -> dict[str, Any] | None:
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read layout preset %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Layout preset %s is not a mapping", path)
            return None
        return data

    def _load_preset_file(self, path: Path) -> LayoutParams | None:
        """Load LayoutParams from a preset file."""
        data = self._read_yaml(path)
        if data is None:
            return None
        try:
            return LayoutParams(**(data.get("params") or {}))
        except ValidationError as e:
            logger.warning("Invalid layout preset %s: %s", path, e)
            return None

    def clear_cache(self) -> None:
        """Clear the preset cache."""
        self._cache.clear()
