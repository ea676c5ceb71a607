"""
Android Library Generator

Scaffolds Android library modules, optionally wired as the Android
platform target of a Cordova plugin (plugin.xml).
"""

__version__ = "0.1.0"

from android_lib_generator.core.plugin_config import extract_platform_config
from android_lib_generator.core.library_writer import write_library

__all__ = [
    "extract_platform_config",
    "write_library",
]
