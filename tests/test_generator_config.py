"""Tests for generator answers, defaults file and template values."""

from __future__ import annotations

from pathlib import Path

import pytest

from android_lib_generator.core.errors import ConfigError
from android_lib_generator.core.generator_config import (
    GeneratorConfig,
    GeneratorDefaults,
    build_template_values,
    default_package,
    load_defaults,
    remote_group_id,
    save_defaults,
)
from android_lib_generator.core.plugin_config import (
    Dependency,
    PluginExtraction,
)

CORDOVA = Dependency("cordova-android", "com.github.mfdeveloper:cordova-android:7.1.1")


def _config(**overrides: object) -> GeneratorConfig:
    values: dict[str, object] = {
        "name": "Camera",
        "package": "com.acme.camera",
        "min_sdk_version": 21,
        "target_sdk_version": 33,
    }
    values.update(overrides)
    return GeneratorConfig(**values)  # type: ignore[arg-type]


class TestGeneratorConfig:
    """Answer validation and derived values."""

    def test_module_is_lowercase_name(self) -> None:
        assert _config(name="CameraKit").module == "camerakit"

    def test_valid_config_passes(self) -> None:
        _config().validate()

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"name": "  "}, "Library name is required"),
            ({"name": "My Lib"}, "must be a Java class name"),
            ({"name": "../../Escaped"}, "must be a Java class name"),
            ({"name": "camera-kit"}, "must be a Java class name"),
            ({"package": "com..acme"}, "Invalid Java package"),
            ({"package": "1com.acme"}, "Invalid Java package"),
            ({"lang": "kotlin"}, "Unsupported language"),
            ({"min_sdk_version": 3000}, "Unknown minimum Android SDK"),
            ({"target_sdk_version": 999}, "Unknown target Android SDK"),
            ({"min_sdk_version": 30, "target_sdk_version": 21}, "newer than target"),
        ],
    )
    def test_invalid_config(self, overrides: dict[str, object], message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            _config(**overrides).validate()

    def test_with_remote_group_returns_copy(self) -> None:
        config = _config()
        forked = config.with_remote_group("com.github.acme")

        assert forked.remote_group == "com.github.acme"
        assert config.remote_group is None


class TestDefaultsHelpers:
    """Package and group id defaults."""

    def test_default_package_from_plugin(self) -> None:
        assert default_package("Lib", "com.acme.camerakit") == "com.acme.camerakit.lib"

    def test_default_package_without_plugin(self) -> None:
        assert default_package("Lib", None) == "com.example.app"

    def test_remote_group_id(self) -> None:
        assert remote_group_id("github", "acme") == "com.github.acme"


class TestTemplateValues:
    """Values rendered into the module templates."""

    def test_dependencies_rendered_as_implementation_lines(self) -> None:
        extraction = PluginExtraction(dependencies=(CORDOVA,), platform_found=True)
        values = build_template_values(
            _config(extra_dependencies=("com.squareup.okhttp3:okhttp:4.12.0",)),
            extraction,
        )

        assert values["dependencies"] == (
            "implementation 'com.github.mfdeveloper:cordova-android:7.1.1'\n\t"
            + "implementation 'com.squareup.okhttp3:okhttp:4.12.0'"
        )
        assert values["module"] == "camera"
        assert values["minSdkVersion"] == 21
        assert values["targetSdkVersion"] == 33
        assert values["extend"] == {"manifest": "", "application": ""}

    def test_excluded_dependencies_keep_configured_ones(self) -> None:
        extraction = PluginExtraction(dependencies=(CORDOVA,), platform_found=True)
        values = build_template_values(
            _config(exclude_dependencies=True, extra_dependencies=("a:b:1",)),
            extraction,
        )

        assert values["dependencies"] == "implementation 'a:b:1'"

    def test_no_dependencies(self) -> None:
        values = build_template_values(_config(), PluginExtraction())
        assert values["dependencies"] == ""
        assert values["remoteGroup"] is None


class TestDefaultsFile:
    """android-lib.yaml loading and saving."""

    def test_missing_file_gives_empty_defaults(self, tmp_path: Path) -> None:
        assert load_defaults(tmp_path) == GeneratorDefaults()

    def test_values_are_loaded(self, tmp_path: Path) -> None:
        (tmp_path / "android-lib.yaml").write_text(
            "# answers for alib\n"
            "name: Camera\n"
            "package: com.acme.camera\n"
            "min_sdk_version: 21\n"
            "target_sdk_version: '33'\n"
            "dependencies:\n"
            "  - com.squareup.okhttp3:okhttp:4.12.0\n"
        )

        defaults = load_defaults(tmp_path)

        assert defaults.name == "Camera"
        assert defaults.package == "com.acme.camera"
        assert defaults.lang is None
        assert defaults.min_sdk_version == 21
        assert defaults.target_sdk_version == 33
        assert defaults.dependencies == ("com.squareup.okhttp3:okhttp:4.12.0",)

    def test_unknown_keys_are_warned(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "android-lib.yaml").write_text("name: Camera\ncolour: blue\n")

        defaults = load_defaults(tmp_path)

        assert defaults.name == "Camera"
        assert "Ignoring unknown key 'colour'" in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("- a\n- b\n", "must contain a mapping"),
            ("min_sdk_version: latest\n", "must be an integer"),
            ("dependencies: okhttp\n", "must be a list"),
            ("name: [unclosed\n", "Invalid YAML"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, content: str, message: str) -> None:
        (tmp_path / "android-lib.yaml").write_text(content)

        with pytest.raises(ConfigError, match=message):
            load_defaults(tmp_path)

    def test_saved_answers_load_back(self, tmp_path: Path) -> None:
        config = _config(extra_dependencies=("a:b:1",))

        path = save_defaults(tmp_path, config)
        defaults = load_defaults(tmp_path)

        assert path.name == "android-lib.yaml"
        assert defaults == GeneratorDefaults(
            name="Camera",
            package="com.acme.camera",
            lang="java",
            min_sdk_version=21,
            target_sdk_version=33,
            dependencies=("a:b:1",),
        )

    def test_saving_keeps_comments_and_other_keys(self, tmp_path: Path) -> None:
        defaults_path = tmp_path / "android-lib.yaml"
        defaults_path.write_text(
            "# answers for alib\n"
            "name: Old  # library class\n"
            "colour: blue\n"
        )

        save_defaults(tmp_path, _config())

        content = defaults_path.read_text()
        assert "# answers for alib" in content
        assert "# library class" in content
        assert "colour: blue" in content
        assert load_defaults(tmp_path).name == "Camera"
