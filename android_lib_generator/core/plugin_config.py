"""Extract Android build configuration from a decoded plugin.xml tree.

The tree comes from ``plugin_xml.decode_xml``: repeatable elements show up
either as a single mapping or as a list of mappings depending on how many
times they occur in the document. Every such field goes through
``decode_field`` / ``as_sequence`` before any selection happens, so the
single-object and list shapes are filtered by the same predicates.

Extraction is pure: it never raises, never touches the filesystem, and a
document without a usable platform entry yields ``PluginExtraction()``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from android_lib_generator.core.settings import (
    BUILD_SCRIPT_SUFFIX,
    DEFAULT_DEPENDENCY_NAME,
    DEFAULT_DEPENDENCY_VALUE,
    MANIFEST_TARGET,
    PACKAGE_SEPARATOR,
    SOURCE_DIR_PREFIX,
    TARGET_PLATFORM,
)

T = TypeVar("T")

Entry = Mapping[str, Any]


# ============================================================================
# One | Many field shape
# ============================================================================


@dataclass(frozen=True)
class One(Generic[T]):
    """Field that occurred once in the source document."""

    value: T


@dataclass(frozen=True)
class Many(Generic[T]):
    """Field that occurred several times, in document order."""

    values: tuple[T, ...]


Field = One[T] | Many[T]


def decode_field(raw: object) -> Field[object] | None:
    """Tag a raw tree value as One or Many (None when absent)."""
    if raw is None:
        return None
    if isinstance(raw, list | tuple):
        return Many(tuple(cast(list[object], raw)))
    return One(raw)


def as_sequence(decoded: Field[T] | None) -> tuple[T, ...]:
    """Normalize a decoded field to an ordered tuple."""
    if decoded is None:
        return ()
    if isinstance(decoded, Many):
        return decoded.values
    return (decoded.value,)


def _entries(raw: object) -> tuple[Entry, ...]:
    """Normalized field, keeping only mapping entries."""
    return tuple(
        cast(Entry, item)
        for item in as_sequence(decode_field(raw))
        if isinstance(item, Mapping)
    )


def _first(entries: tuple[Entry, ...], predicate: Callable[[Entry], bool]) -> Entry | None:
    for entry in entries:
        if predicate(entry):
            return entry
    return None


# ============================================================================
# Extracted records
# ============================================================================


@dataclass(frozen=True)
class Dependency:
    """Build dependency rendered as ``implementation '<value>'``."""

    name: str
    value: str


@dataclass(frozen=True)
class ManifestFragment:
    """``config-file`` entry targeting AndroidManifest.xml.

    ``payload`` holds the elements to merge (everything except the
    ``target`` and ``parent`` attributes).
    """

    target: str
    parent: str | None
    payload: Mapping[str, Any]

    @property
    def parent_tag(self) -> str:
        """Last element name of ``parent``; wildcards fall back to application."""
        if not self.parent:
            return "application"
        tag = self.parent.rstrip("/").split("/")[-1]
        if not tag or tag == "*":
            return "application"
        return tag

    def targets_application(self) -> bool:
        return "AndroidManifest" in self.target and "application" in (self.parent or "")


@dataclass(frozen=True)
class BuildScriptFragment:
    """``framework`` entry pointing at an extra ``.gradle`` script."""

    src: str

    @property
    def filename(self) -> str:
        return self.src.replace("\\", "/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class SourceFileRef:
    """First ``source-file`` entry of the platform."""

    src: str | None
    target_dir: str | None

    @property
    def filename(self) -> str | None:
        if not self.src:
            return None
        return self.src.replace("\\", "/").rsplit("/", 1)[-1]

    def is_java(self) -> bool:
        return bool(self.src) and ".java" in cast(str, self.src)


@dataclass(frozen=True)
class DerivedPackage:
    """Java package derived from a source file ``target-dir``."""

    package_path: str
    package: str


@dataclass(frozen=True)
class PluginExtraction:
    """Normalized Android configuration of a Cordova plugin."""

    dependencies: tuple[Dependency, ...] = ()
    manifest_fragment: ManifestFragment | None = None
    build_script_fragment: BuildScriptFragment | None = None
    source_file: SourceFileRef | None = None
    package: DerivedPackage | None = None
    platform_found: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.platform_found

    def as_dict(self) -> dict[str, object]:
        """Plain-data view used for YAML reports."""
        return {
            "platform_found": self.platform_found,
            "dependencies": [
                {"name": dep.name, "value": dep.value} for dep in self.dependencies
            ],
            "manifest_fragment": (
                {
                    "target": self.manifest_fragment.target,
                    "parent": self.manifest_fragment.parent,
                    "payload": _plain(self.manifest_fragment.payload),
                }
                if self.manifest_fragment
                else None
            ),
            "build_script_fragment": (
                {"src": self.build_script_fragment.src}
                if self.build_script_fragment
                else None
            ),
            "source_file": (
                {
                    "src": self.source_file.src,
                    "target_dir": self.source_file.target_dir,
                }
                if self.source_file
                else None
            ),
            "package": (
                {
                    "package_path": self.package.package_path,
                    "package": self.package.package,
                }
                if self.package
                else None
            ),
        }


def _plain(value: object) -> object:
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in cast(Entry, value).items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in cast(list[object], value)]
    return value


# ============================================================================
# Selection rules
# ============================================================================


def _is_manifest_entry(entry: Entry) -> bool:
    return entry.get("target") == MANIFEST_TARGET


def _is_build_script(entry: Entry) -> bool:
    src = entry.get("src")
    return isinstance(src, str) and src.endswith(BUILD_SCRIPT_SUFFIX)


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def derive_package(target_dir: str | None) -> DerivedPackage | None:
    """Derive package path and dotted name from a ``target-dir`` value.

    ``src/com/example/lib`` -> ``com/example/lib`` / ``com.example.lib``.
    """
    if not target_dir:
        return None
    package_path = target_dir.replace("\\", "/")
    if package_path.startswith(SOURCE_DIR_PREFIX):
        package_path = package_path[len(SOURCE_DIR_PREFIX):]
    package_path = package_path.strip("/")
    if not package_path:
        return None
    return DerivedPackage(
        package_path=package_path,
        package=package_path.replace("/", PACKAGE_SEPARATOR),
    )


def find_platform(document: object, platform: str = TARGET_PLATFORM) -> Entry | None:
    """Return the ``<platform name=...>`` entry of a decoded plugin.xml."""
    if not isinstance(document, Mapping):
        return None
    plugin = cast(Entry, document).get("plugin")
    if not isinstance(plugin, Mapping):
        return None
    return _first(
        _entries(cast(Entry, plugin).get("platform")),
        lambda entry: entry.get("name") == platform,
    )


def extract_platform_config(
    document: object,
    platform: str = TARGET_PLATFORM,
    exclude_dependencies: bool = False,
) -> PluginExtraction:
    """Extract the normalized configuration for ``platform``.

    Args:
        document: Decoded plugin.xml tree (``{"plugin": {...}}``)
        platform: Platform name to look up
        exclude_dependencies: Leave out the default runtime dependency

    Returns:
        Extraction record; ``PluginExtraction()`` when the platform is absent
    """
    entry = find_platform(document, platform)
    if entry is None:
        return PluginExtraction()

    manifest_fragment = None
    manifest_entry = _first(_entries(entry.get("config-file")), _is_manifest_entry)
    if manifest_entry is not None:
        manifest_fragment = ManifestFragment(
            target=cast(str, manifest_entry["target"]),
            parent=_optional_str(manifest_entry.get("parent")),
            payload={
                key: value
                for key, value in manifest_entry.items()
                if key not in ("target", "parent")
            },
        )

    build_script_fragment = None
    framework_entry = _first(_entries(entry.get("framework")), _is_build_script)
    if framework_entry is not None:
        build_script_fragment = BuildScriptFragment(src=cast(str, framework_entry["src"]))

    source_file = None
    package = None
    source_entries = _entries(entry.get("source-file"))
    if source_entries:
        first_source = source_entries[0]
        source_file = SourceFileRef(
            src=_optional_str(first_source.get("src")),
            target_dir=_optional_str(first_source.get("target-dir")),
        )
        package = derive_package(source_file.target_dir)

    dependencies: tuple[Dependency, ...] = ()
    if not exclude_dependencies:
        dependencies = (Dependency(DEFAULT_DEPENDENCY_NAME, DEFAULT_DEPENDENCY_VALUE),)

    return PluginExtraction(
        dependencies=dependencies,
        manifest_fragment=manifest_fragment,
        build_script_fragment=build_script_fragment,
        source_file=source_file,
        package=package,
        platform_found=True,
    )
