"""
Config - layout parameter presets loaded from YAML.
"""

from chuk_music_engraving.config.loader import LayoutConfigLoader, PresetMetadata

__all__ = ["LayoutConfigLoader", "PresetMetadata"]
