"""Shared fixtures for the generator test suite.

Provides a realistic Cordova ``plugin.xml`` and a ``plugin_project``
factory laying out the files the generator reads (plugin sources, an
extra gradle script and an existing ``android/settings.gradle``).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from android_lib_generator.core.settings import TOKEN_ENV_VAR

PLUGIN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<plugin xmlns="http://apache.org/cordova/ns/plugins/1.0"
        xmlns:android="http://schemas.android.com/apk/res/android"
        id="cordova-plugin-camera-kit" version="1.0.0">
    <name>CameraKit</name>
    <platform name="ios">
        <source-file src="src/ios/CameraKit.m"/>
    </platform>
    <platform name="android">
        <config-file target="res/xml/config.xml" parent="/*">
            <feature name="CameraKit">
                <param name="android-package" value="com.acme.camerakit.CameraKit"/>
            </feature>
        </config-file>
        <config-file target="AndroidManifest.xml" parent="/manifest/application">
            <activity android:name="com.acme.camerakit.PreviewActivity" android:exported="false"/>
        </config-file>
        <framework src="com.android.support:appcompat-v7:28.0.0"/>
        <framework src="src/android/build-extras.gradle" custom="true" type="gradleReference"/>
        <source-file src="src/android/CameraKit.java" target-dir="src/com/acme/camerakit"/>
        <source-file src="src/android/Helper.java" target-dir="src/com/acme/camerakit"/>
    </platform>
</plugin>
"""

SETTINGS_GRADLE = "rootProject.name = 'host'\ninclude ':app'\n"


def write_plugin_project(root: Path, plugin_xml: str = PLUGIN_XML) -> Path:
    """Lay out a Cordova plugin checkout under ``root``."""
    sources = root / "src" / "android"
    sources.mkdir(parents=True, exist_ok=True)
    (root / "plugin.xml").write_text(plugin_xml, encoding="utf-8")
    (sources / "CameraKit.java").write_text(
        "package com.acme.camerakit;\n\npublic class CameraKit {}\n",
        encoding="utf-8",
    )
    (sources / "Helper.java").write_text(
        "package com.acme.camerakit;\n\nclass Helper {}\n",
        encoding="utf-8",
    )
    (sources / "build-extras.gradle").write_text(
        "ext.cdvMinSdkVersion = 21\n",
        encoding="utf-8",
    )
    android_dir = root / "android"
    android_dir.mkdir(exist_ok=True)
    (android_dir / "settings.gradle").write_text(SETTINGS_GRADLE, encoding="utf-8")
    return root


@pytest.fixture()
def plugin_xml() -> str:
    """Sample plugin.xml content."""
    return PLUGIN_XML


@pytest.fixture()
def plugin_project(tmp_path: Path) -> Path:
    """Cordova plugin checkout with sources, extras and settings.gradle."""
    return write_plugin_project(tmp_path / "camera-kit")


@pytest.fixture()
def empty_project(tmp_path: Path) -> Path:
    """Directory without plugin.xml."""
    project = tmp_path / "empty"
    project.mkdir()
    return project


@pytest.fixture(autouse=True)
def _no_remote_token(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a developer's GITREMOTE_TOKEN out of the tests."""
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
    monkeypatch.delenv("ALIB_GIT_API_URL", raising=False)
    yield


@pytest.fixture()
def chdir_tmp(tmp_path: Path) -> Iterator[Path]:
    """cd into ``tmp_path`` for the duration of the test."""
    original_cwd = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)
