"""Constants and environment-driven settings."""

import os

# Platform entry in plugin.xml handled by the generator
TARGET_PLATFORM = "android"

MANIFEST_TARGET = "AndroidManifest.xml"
BUILD_SCRIPT_SUFFIX = ".gradle"
SOURCE_DIR_PREFIX = "src/"
PACKAGE_SEPARATOR = "."

PLUGIN_FILE = "plugin.xml"
DEFAULTS_FILE = "android-lib.yaml"

# Native runtime library added to every module generated from a Cordova plugin
DEFAULT_DEPENDENCY_NAME = "cordova-android"
DEFAULT_DEPENDENCY_VALUE = "com.github.mfdeveloper:cordova-android:7.1.1"

DEFAULT_LIBRARY_NAME = "Lib"
DEFAULT_PACKAGE = "com.example.app"
DEFAULT_LANG = "java"
SUPPORTED_LANGS: dict[str, str] = {
    "java": "Java",
}

DEFAULT_REMOTE = "github"
DEFAULT_GIT_API_URL = "https://api.github.com"

TOKEN_ENV_VAR = "GITREMOTE_TOKEN"
API_URL_ENV_VAR = "ALIB_GIT_API_URL"


def get_git_api_url() -> str:
    """Return the hosted Git API base URL (env override or GitHub)."""
    return os.environ.get(API_URL_ENV_VAR) or DEFAULT_GIT_API_URL
