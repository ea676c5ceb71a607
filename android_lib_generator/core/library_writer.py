"""Write an Android library module into a destination directory.

Phases, in order:
    1. normalize_file_paths  - copy plugin sources into their package dir
    2. render_library        - render templates/lib/<lang> into android/<module>
    3. patch_settings_gradle - include the module in android/settings.gradle
    4. apply_build_extras    - hook the plugin's extra .gradle script
    5. extend_manifest       - merge the plugin's application manifest fragment
    6. cleanup_sources       - drop the top-level copies moved in phase 1
"""

from __future__ import annotations

import functools
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from android_lib_generator.core.errors import TemplateError
from android_lib_generator.core.generator_config import GeneratorConfig, build_template_values
from android_lib_generator.core.plugin_config import (
    BuildScriptFragment,
    ManifestFragment,
    PluginExtraction,
)
from android_lib_generator.core.plugin_xml import encode_xml
from android_lib_generator.helpers.helpers_logging import (
    print_info,
    print_skip,
    print_success,
    print_warning,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_SUFFIX = ".j2"

# Path placeholders inside templates/lib/<lang>/
PACKAGE_PATH_PLACEHOLDER = "__package_path__"
NAME_PLACEHOLDER = "__name__"

PLUGIN_SOURCES_DIR = Path("src") / "android"
ANDROID_DIR = "android"


@dataclass
class WriteReport:
    """Paths touched by a generator run, relative to the destination."""

    created: list[Path] = field(default_factory=list)
    modified: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)


@functools.lru_cache(maxsize=1)
def get_jinja_env() -> jinja2.Environment:
    """Return the cached Jinja2 environment rooted at the templates dir."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )


def render_template(name: str, values: dict[str, object]) -> str:
    """Render one template by its path relative to the templates dir.

    Raises:
        TemplateError: If the template is missing or fails to render
    """
    try:
        return get_jinja_env().get_template(name).render(**values)
    except jinja2.TemplateNotFound as exc:
        raise TemplateError(f"Template not found: {exc.name}") from exc
    except jinja2.TemplateError as exc:
        raise TemplateError(f"Failed to render {name}: {exc}") from exc


def module_dir(destination: Path, config: GeneratorConfig) -> Path:
    return destination / ANDROID_DIR / config.module


def _rel(path: Path, destination: Path) -> str:
    try:
        return path.relative_to(destination).as_posix()
    except ValueError:
        return str(path)


# ============================================================================
# Phase 1: plugin sources
# ============================================================================


def normalize_file_paths(destination: Path, extraction: PluginExtraction) -> list[Path]:
    """Copy top-level ``src/android/*.java`` into the derived package dir.

    Nothing happens when the plugin has no derived package, or when the
    package dir already holds the first source file.

    Returns:
        Copied files (destination paths)
    """
    if extraction.package is None or extraction.source_file is None:
        return []

    sources_dir = destination / PLUGIN_SOURCES_DIR
    package_dir = sources_dir / extraction.package.package_path
    package_dir.mkdir(parents=True, exist_ok=True)

    first_name = extraction.source_file.filename
    if first_name and (package_dir / first_name).exists():
        print_skip(f"Sources already in package dir: {_rel(package_dir, destination)}")
        return []

    copied: list[Path] = []
    for source in sorted(sources_dir.glob("*.java")):
        if not source.is_file():
            continue
        target = package_dir / source.name
        shutil.copy2(source, target)
        copied.append(target)
        print_success(f"Copied {_rel(source, destination)} -> {_rel(target, destination)}")
    return copied


# ============================================================================
# Phase 2: module templates
# ============================================================================


def _target_relpath(relpath: str, config: GeneratorConfig) -> str:
    relpath = relpath.replace(PACKAGE_PATH_PLACEHOLDER, config.package.replace(".", "/"))
    relpath = relpath.replace(NAME_PLACEHOLDER, config.name)
    if relpath.endswith(TEMPLATE_SUFFIX):
        relpath = relpath[: -len(TEMPLATE_SUFFIX)]
    return relpath


def render_library(
    destination: Path,
    config: GeneratorConfig,
    values: dict[str, object],
) -> list[Path]:
    """Render ``templates/lib/<lang>/`` into ``android/<module>/``.

    ``*.j2`` files are rendered with ``values``; other files are copied.

    Raises:
        TemplateError: If there are no templates for the language
    """
    template_root = TEMPLATES_DIR / "lib" / config.lang
    if not template_root.is_dir():
        raise TemplateError(f"No library templates for language '{config.lang}'")

    target_root = module_dir(destination, config)
    written: list[Path] = []
    for template_file in sorted(template_root.rglob("*")):
        if not template_file.is_file():
            continue
        relpath = template_file.relative_to(template_root).as_posix()
        target = target_root / _target_relpath(relpath, config)
        target.parent.mkdir(parents=True, exist_ok=True)

        if template_file.name.endswith(TEMPLATE_SUFFIX):
            template_name = template_file.relative_to(TEMPLATES_DIR).as_posix()
            target.write_text(render_template(template_name, values), encoding="utf-8")
        else:
            shutil.copy2(template_file, target)
        written.append(target)
        print_success(f"Created {_rel(target, destination)}")
    return written


# ============================================================================
# Phase 3: settings.gradle
# ============================================================================


def patch_settings_gradle(destination: Path, module: str) -> bool:
    """Add ``':<module>'`` to the include list of ``android/settings.gradle``.

    Returns:
        True if the file was changed
    """
    settings_path = destination / ANDROID_DIR / "settings.gradle"
    if not settings_path.exists():
        print_skip(f"No {ANDROID_DIR}/settings.gradle, module not registered")
        return False

    module_ref = f"':{module}'"
    content = settings_path.read_text(encoding="utf-8")
    if re.search(rf"""['"]:{re.escape(module)}['"]""", content):
        print_skip(f"Module {module_ref} already in settings.gradle")
        return False

    lines = content.splitlines()
    include_idx = None
    for idx, line in enumerate(lines):
        if line.lstrip().startswith("include"):
            include_idx = idx
    # A trailing comma continues the include list on the next line
    if include_idx is None or lines[include_idx].rstrip().endswith(","):
        lines.append(f"include {module_ref}")
    else:
        lines[include_idx] = f"{lines[include_idx].rstrip()}, {module_ref}"

    settings_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print_success(f"Registered {module_ref} in {ANDROID_DIR}/settings.gradle")
    return True


# ============================================================================
# Phase 4: extra build script
# ============================================================================


def build_extras_block(filename: str) -> str:
    """Gradle snippet applying ``filename`` when it exists."""
    return (
        f"def hasBuildExtras = file('{filename}').exists()\n"
        + "if (hasBuildExtras) {\n"
        + f"\tapply from: '{filename}'\n"
        + "}\n"
        + "\n"
    )


def apply_build_extras(
    destination: Path,
    config: GeneratorConfig,
    fragment: BuildScriptFragment,
    report: WriteReport,
) -> None:
    """Prepend the build-extras hook and copy the plugin's gradle file."""
    gradle_file = module_dir(destination, config) / "build.gradle"
    if not gradle_file.exists():
        print_warning(f"{_rel(gradle_file, destination)} not found, build extras not applied")
        return

    content = gradle_file.read_text(encoding="utf-8")
    if f"apply from: '{fragment.filename}'" in content:
        print_skip(f"Build extras already applied: {fragment.filename}")
    else:
        gradle_file.write_text(build_extras_block(fragment.filename) + content, encoding="utf-8")
        report.modified.append(gradle_file)
        print_success(f"Applied build extras {fragment.filename} in {_rel(gradle_file, destination)}")

    source = destination / fragment.src
    if source.is_file():
        target = gradle_file.parent / fragment.filename
        shutil.copy2(source, target)
        report.created.append(target)
        print_success(f"Copied {fragment.src} -> {_rel(target, destination)}")
    else:
        print_skip(f"Plugin gradle file not found: {fragment.src}")


# ============================================================================
# Phase 5: app manifest
# ============================================================================


def extend_manifest(
    destination: Path,
    config: GeneratorConfig,
    fragment: ManifestFragment,
) -> Path | None:
    """Render the app manifest with the plugin's fragment merged in.

    Only fragments targeting AndroidManifest under ``application`` apply.

    Returns:
        Written manifest path, or None when the fragment does not apply
    """
    if not fragment.targets_application():
        print_skip(f"Manifest fragment for '{fragment.parent}' not merged")
        return None

    extend = {"manifest": "", "application": ""}
    extend[fragment.parent_tag] = encode_xml(fragment.payload)

    content = render_template(
        f"app/{config.lang}/app/src/main/AndroidManifest.xml{TEMPLATE_SUFFIX}",
        {"package": config.package, "extend": extend},
    )
    manifest_path = destination / ANDROID_DIR / "app" / "src" / "main" / "AndroidManifest.xml"
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    manifest_path.write_text(content, encoding="utf-8")
    print_success(f"Extended {_rel(manifest_path, destination)} <{fragment.parent_tag}>")
    return manifest_path


# ============================================================================
# Phase 6: cleanup
# ============================================================================


def cleanup_sources(destination: Path, extraction: PluginExtraction) -> list[Path]:
    """Remove top-level ``src/android/*.java`` already copied to the package dir.

    Files without a copy in the package dir are kept.

    Returns:
        Removed files
    """
    source_file = extraction.source_file
    if source_file is None or not source_file.is_java() or extraction.package is None:
        return []
    if not (destination / str(source_file.src)).exists():
        return []

    sources_dir = destination / PLUGIN_SOURCES_DIR
    package_dir = sources_dir / extraction.package.package_path
    removed: list[Path] = []
    for source in sorted(sources_dir.glob("*.java")):
        if source.is_file() and (package_dir / source.name).is_file():
            source.unlink()
            removed.append(source)
    if removed:
        print_info(f"Cleanup original {len(removed)} *.java file(s) in {PLUGIN_SOURCES_DIR.as_posix()}")
    return removed


def write_library(
    destination: Path,
    config: GeneratorConfig,
    extraction: PluginExtraction,
) -> WriteReport:
    """Run every writing phase for one module."""
    report = WriteReport()

    report.created.extend(normalize_file_paths(destination, extraction))

    values = build_template_values(config, extraction)
    report.created.extend(render_library(destination, config, values))

    if patch_settings_gradle(destination, config.module):
        report.modified.append(destination / ANDROID_DIR / "settings.gradle")

    if extraction.build_script_fragment is not None:
        apply_build_extras(destination, config, extraction.build_script_fragment, report)

    if extraction.manifest_fragment is not None:
        manifest_path = extend_manifest(destination, config, extraction.manifest_fragment)
        if manifest_path is not None:
            report.modified.append(manifest_path)

    report.removed.extend(cleanup_sources(destination, extraction))
    return report
