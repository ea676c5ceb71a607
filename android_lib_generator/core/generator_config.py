"""Generator answers and the values handed to the templates.

``GeneratorConfig`` is built once after prompting and passed unchanged to
every writing step.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, cast

from android_lib_generator.core.android_versions import (
    DEFAULT_MIN_SDK,
    default_target_sdk,
    find_version,
)
from android_lib_generator.core.errors import ConfigError
from android_lib_generator.core.plugin_config import PluginExtraction
from android_lib_generator.core.settings import (
    DEFAULT_LANG,
    DEFAULT_PACKAGE,
    DEFAULTS_FILE,
    SUPPORTED_LANGS,
)
from android_lib_generator.helpers.helpers_logging import print_warning
from android_lib_generator.helpers.yaml_loader import (
    ConfigDict,
    load_yaml_file,
    save_yaml_file,
)

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Keys accepted in android-lib.yaml
DEFAULTS_KEYS = (
    "name",
    "package",
    "lang",
    "min_sdk_version",
    "target_sdk_version",
    "dependencies",
)


@dataclass(frozen=True)
class GeneratorConfig:
    """Answers collected for one generator run."""

    name: str
    package: str
    lang: str = DEFAULT_LANG
    min_sdk_version: int = DEFAULT_MIN_SDK
    target_sdk_version: int = field(default_factory=default_target_sdk)
    remote_group: str | None = None
    exclude_dependencies: bool = False
    extra_dependencies: tuple[str, ...] = ()

    @property
    def module(self) -> str:
        """Gradle module directory name."""
        return self.name.lower()

    def validate(self) -> None:
        """Check the answers before anything is written.

        Raises:
            ConfigError: On the first invalid value
        """
        if not self.name.strip():
            raise ConfigError("Library name is required")
        if not _IDENTIFIER_RE.fullmatch(self.name):
            raise ConfigError(f"Library name must be a Java class name: '{self.name}'")
        if not _PACKAGE_RE.match(self.package):
            raise ConfigError(f"Invalid Java package name: '{self.package}'")
        if self.lang not in SUPPORTED_LANGS:
            supported = ", ".join(sorted(SUPPORTED_LANGS))
            raise ConfigError(f"Unsupported language '{self.lang}' (supported: {supported})")
        for label, api in (
            ("minimum", self.min_sdk_version),
            ("target", self.target_sdk_version),
        ):
            if find_version(api) is None:
                raise ConfigError(f"Unknown {label} Android SDK level: {api}")
        if self.min_sdk_version > self.target_sdk_version:
            raise ConfigError(
                f"Minimum SDK ({self.min_sdk_version}) is newer than "
                + f"target SDK ({self.target_sdk_version})"
            )

    def with_remote_group(self, remote_group: str | None) -> GeneratorConfig:
        return replace(self, remote_group=remote_group)


@dataclass(frozen=True)
class GeneratorDefaults:
    """Prompt defaults read from android-lib.yaml (all optional)."""

    name: str | None = None
    package: str | None = None
    lang: str | None = None
    min_sdk_version: int | None = None
    target_sdk_version: int | None = None
    dependencies: tuple[str, ...] = field(default_factory=tuple)


def default_package(name: str, plugin_package: str | None) -> str:
    """Default package: ``<plugin package>.<name>`` or com.example.app."""
    if plugin_package:
        return f"{plugin_package}.{name.lower()}"
    return DEFAULT_PACKAGE


def remote_group_id(remote: str, organization: str) -> str:
    """Maven group id for a fork owned by ``organization`` on ``remote``."""
    return f"com.{remote}.{organization}"


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'{key}' must be an integer API level, got {value!r}") from exc


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else str(value)


def load_defaults(destination: Path) -> GeneratorDefaults:
    """Load ``android-lib.yaml`` from the destination directory.

    Returns:
        Defaults from the file, or empty defaults when there is no file

    Raises:
        ConfigError: If the file is not a mapping or has invalid values
    """
    defaults_path = destination / DEFAULTS_FILE
    if not defaults_path.exists():
        return GeneratorDefaults()

    raw = load_yaml_file(defaults_path)
    if raw is None:
        return GeneratorDefaults()
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{DEFAULTS_FILE} must contain a mapping")

    data = cast(Mapping[str, Any], raw)
    for key in data:
        if key not in DEFAULTS_KEYS:
            print_warning(f"Ignoring unknown key '{key}' in {DEFAULTS_FILE}")

    raw_deps = data.get("dependencies") or []
    if not isinstance(raw_deps, list):
        raise ConfigError("'dependencies' must be a list of Gradle coordinates")

    return GeneratorDefaults(
        name=_optional_str(data, "name"),
        package=_optional_str(data, "package"),
        lang=_optional_str(data, "lang"),
        min_sdk_version=_optional_int(data, "min_sdk_version"),
        target_sdk_version=_optional_int(data, "target_sdk_version"),
        dependencies=tuple(str(dep) for dep in cast(list[object], raw_deps)),
    )


def save_defaults(destination: Path, config: GeneratorConfig) -> Path:
    """Write the answers of this run to ``android-lib.yaml``.

    An existing mapping is updated in place, so its comments and any
    other keys are kept.
    """
    defaults_path = destination / DEFAULTS_FILE
    data: ConfigDict = {}
    if defaults_path.exists():
        existing = load_yaml_file(defaults_path)
        if isinstance(existing, dict):
            data = cast(ConfigDict, existing)

    data["name"] = config.name
    data["package"] = config.package
    data["lang"] = config.lang
    data["min_sdk_version"] = config.min_sdk_version
    data["target_sdk_version"] = config.target_sdk_version
    if config.extra_dependencies:
        data["dependencies"] = list(config.extra_dependencies)
    save_yaml_file(data, defaults_path)
    return defaults_path


def build_template_values(
    config: GeneratorConfig,
    extraction: PluginExtraction,
) -> dict[str, object]:
    """Values available to the module templates."""
    coordinates: list[str] = []
    if not config.exclude_dependencies:
        coordinates.extend(dep.value for dep in extraction.dependencies)
    coordinates.extend(config.extra_dependencies)

    return {
        "package": config.package,
        "name": config.name,
        "module": config.module,
        "minSdkVersion": config.min_sdk_version,
        "targetSdkVersion": config.target_sdk_version,
        "lang": config.lang,
        "dependencies": "\n\t".join(f"implementation '{dep}'" for dep in coordinates),
        "remoteGroup": config.remote_group,
        "extend": {
            "manifest": "",
            "application": "",
        },
    }
