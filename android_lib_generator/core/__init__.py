"""Core generator logic: plugin.xml extraction, answers and module writing."""

from android_lib_generator.core.plugin_config import (
    PluginExtraction,
    extract_platform_config,
)

__all__ = ["PluginExtraction", "extract_platform_config"]
