"""Tests for answer collection (prompt defaults and skipping)."""

from __future__ import annotations

import pytest

from android_lib_generator.cli.prompts import AnswerOptions, collect_answers
from android_lib_generator.core.android_versions import default_target_sdk
from android_lib_generator.core.errors import ConfigError
from android_lib_generator.core.generator_config import GeneratorDefaults
from android_lib_generator.core.plugin_config import (
    DerivedPackage,
    PluginExtraction,
)
from android_lib_generator.helpers.remote_git import GitRemoteClient

PLUGIN_EXTRACTION = PluginExtraction(
    package=DerivedPackage("com/acme/camerakit", "com.acme.camerakit"),
    platform_found=True,
)


class _FakeClient(GitRemoteClient):
    def __init__(self, organizations: list[str]):
        super().__init__(token="t")
        self.organizations = organizations

    def list_organizations(self) -> list[str]:
        return self.organizations


class TestNoInput:
    """Defaults used without prompting."""

    def test_builtin_defaults(self) -> None:
        config = collect_answers(
            options=AnswerOptions(),
            defaults=GeneratorDefaults(),
            extraction=PluginExtraction(),
            no_input=True,
        )

        assert config.name == "Lib"
        assert config.package == "com.example.app"
        assert config.lang == "java"
        assert config.min_sdk_version == 19
        assert config.target_sdk_version == default_target_sdk()
        assert config.remote_group is None

    def test_package_defaults_to_plugin_package(self) -> None:
        config = collect_answers(
            options=AnswerOptions(name="Scanner"),
            defaults=GeneratorDefaults(),
            extraction=PLUGIN_EXTRACTION,
            no_input=True,
        )

        assert config.package == "com.acme.camerakit.scanner"
        assert config.module == "scanner"

    def test_defaults_file_and_options(self) -> None:
        config = collect_answers(
            options=AnswerOptions(target_sdk_version=30),
            defaults=GeneratorDefaults(
                name="Camera",
                package="io.acme.camera",
                min_sdk_version=23,
                target_sdk_version=33,
                dependencies=("a:b:1",),
            ),
            extraction=PLUGIN_EXTRACTION,
            exclude_dependencies=True,
            no_input=True,
        )

        assert config.name == "Camera"
        assert config.package == "io.acme.camera"
        assert config.min_sdk_version == 23
        assert config.target_sdk_version == 30
        assert config.extra_dependencies == ("a:b:1",)
        assert config.exclude_dependencies

    def test_unlisted_sdk_defaults_fall_back(self, capsys: pytest.CaptureFixture[str]) -> None:
        config = collect_answers(
            options=AnswerOptions(),
            defaults=GeneratorDefaults(min_sdk_version=10, target_sdk_version=999),
            extraction=PluginExtraction(),
            no_input=True,
        )

        assert config.min_sdk_version == 19
        assert config.target_sdk_version == default_target_sdk()
        assert "API 10 is not offered" in capsys.readouterr().out


class TestRemoteGroup:
    """Fork organization selection."""

    def test_first_organization_without_input(self) -> None:
        config = collect_answers(
            options=AnswerOptions(),
            defaults=GeneratorDefaults(),
            extraction=PluginExtraction(),
            fork_remote="github",
            client=_FakeClient(["acme", "beta"]),
            no_input=True,
        )

        assert config.remote_group == "com.github.acme"

    def test_remote_org_option_skips_api(self) -> None:
        config = collect_answers(
            options=AnswerOptions(remote_org="beta"),
            defaults=GeneratorDefaults(),
            extraction=PluginExtraction(),
            fork_remote="gitlab",
            no_input=True,
        )

        assert config.remote_group == "com.gitlab.beta"

    def test_no_organizations(self, capsys: pytest.CaptureFixture[str]) -> None:
        config = collect_answers(
            options=AnswerOptions(),
            defaults=GeneratorDefaults(),
            extraction=PluginExtraction(),
            fork_remote="github",
            client=_FakeClient([]),
            no_input=True,
        )

        assert config.remote_group is None
        assert "No remote organizations" in capsys.readouterr().out

    def test_credentials_required_without_input(self) -> None:
        with pytest.raises(ConfigError, match="GITREMOTE_TOKEN"):
            collect_answers(
                options=AnswerOptions(),
                defaults=GeneratorDefaults(),
                extraction=PluginExtraction(),
                fork_remote="github",
                no_input=True,
            )
