#!/usr/bin/env python3
"""Android library generator CLI - Main Entry Point.

Usage:
    alib <command> [options]

Commands:
    generate        Generate an Android library module (optionally from a Cordova plugin.xml)
    inspect-plugin  Show the Android configuration extracted from plugin.xml
    sdk-versions    List the Android SDK levels offered by the prompts

Examples:
    # Inside a Cordova plugin checkout
    alib generate

    # Non-interactive, without the cordova-android dependency
    alib generate ./my-plugin --name Camera --package com.acme.camera --deps --no-input

    # Fork into a GitHub organization (token from GITREMOTE_TOKEN)
    alib generate ./my-plugin --git-fork=github
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from android_lib_generator.cli.prompts import AnswerOptions, collect_answers
from android_lib_generator.core.android_versions import (
    MIN_SUPPORTED_API,
    default_min_sdk,
    default_target_sdk,
    get_versions,
)
from android_lib_generator.core.errors import GeneratorError
from android_lib_generator.core.generator_config import load_defaults, save_defaults
from android_lib_generator.core.library_writer import write_library
from android_lib_generator.core.plugin_config import (
    PluginExtraction,
    extract_platform_config,
)
from android_lib_generator.core.plugin_xml import load_plugin_document
from android_lib_generator.core.settings import (
    DEFAULT_REMOTE,
    PLUGIN_FILE,
    TARGET_PLATFORM,
    TOKEN_ENV_VAR,
)
from android_lib_generator.helpers.helpers_logging import (
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from android_lib_generator.helpers.remote_git import GitRemoteClient, resolve_remote_token


def read_plugin(destination: Path, exclude_dependencies: bool = False) -> PluginExtraction:
    """Decode ``plugin.xml`` in ``destination`` and extract its Android config.

    Raises:
        PluginXmlError: If plugin.xml exists but is malformed
    """
    document = load_plugin_document(destination / PLUGIN_FILE)
    if document is None:
        return PluginExtraction()

    extraction = extract_platform_config(
        document,
        TARGET_PLATFORM,
        exclude_dependencies=exclude_dependencies,
    )
    if extraction.is_empty:
        print_info(f"{PLUGIN_FILE} has no '{TARGET_PLATFORM}' platform entry")
    elif extraction.package is None:
        print_warning(
            f"{PLUGIN_FILE} has no source-file target-dir; "
            + "skipping package directory setup"
        )
    return extraction


def run_generate(
    destination: Path,
    options: AnswerOptions,
    *,
    exclude_dependencies: bool = False,
    git_fork: str | None = None,
    git_remote_token: str | None = None,
    save_answers: bool = False,
    no_input: bool = False,
) -> int:
    """Run the full generator flow.

    Returns:
        Exit code (0 on success, 1 on a reported error)
    """
    try:
        destination.mkdir(parents=True, exist_ok=True)
        print_header(f"Android library generator: {destination.resolve()}")

        extraction = read_plugin(destination, exclude_dependencies)
        defaults = load_defaults(destination)

        client = None
        if git_fork:
            token = resolve_remote_token(git_remote_token)
            if token:
                client = GitRemoteClient(token=token)

        config = collect_answers(
            options=options,
            defaults=defaults,
            extraction=extraction,
            fork_remote=git_fork,
            client=client,
            exclude_dependencies=exclude_dependencies,
            no_input=no_input,
        )
        config.validate()

        report = write_library(destination, config, extraction)

        if save_answers:
            defaults_path = save_defaults(destination, config)
            print_success(f"Saved answers to {defaults_path.name}")
    except GeneratorError as exc:
        print_error(str(exc))
        return 1

    print_success(
        f"Module '{config.module}' ready: {len(report.created)} created, "
        + f"{len(report.modified)} modified, {len(report.removed)} removed"
    )
    return 0


# ============================================================================
# Click commands
# ============================================================================


@click.group(name="alib", invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Generate Android library modules, optionally from a Cordova plugin."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(name="generate", help="Generate an Android library module")
@click.argument(
    "destination",
    required=False,
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--exclude-dependencies", "--deps", "exclude_dependencies", is_flag=True,
              help="Exclude default dependencies from build.gradle of the library module")
@click.option("--git-fork", "--fork", "git_fork", is_flag=False, flag_value=DEFAULT_REMOTE,
              default=None,
              help=f"Fork into a remote git organization ({DEFAULT_REMOTE} by default)")
@click.option("--git-remote-token", "--token", "git_remote_token",
              help=f"Remote API token (use with --git-fork; {TOKEN_ENV_VAR} takes precedence)")
@click.option("--remote-org", help="Remote organization (skips the organization prompt)")
@click.option("--name", help="Name of your library")
@click.option("--package", help="Package name for your library")
@click.option("--lang", help="Template language (java)")
@click.option("--min-sdk", "min_sdk", type=int, help="Minimum Android SDK (API level)")
@click.option("--target-sdk", "target_sdk", type=int, help="Target Android SDK (API level)")
@click.option("--save-defaults", "save_answers", is_flag=True,
              help="Save the answers to android-lib.yaml for the next run")
@click.option("--no-input", is_flag=True, help="Do not prompt, use defaults")
@click.pass_context
def generate_cmd(
    ctx: click.Context,
    destination: Path,
    exclude_dependencies: bool,
    git_fork: str | None,
    git_remote_token: str | None,
    remote_org: str | None,
    name: str | None,
    package: str | None,
    lang: str | None,
    min_sdk: int | None,
    target_sdk: int | None,
    save_answers: bool,
    no_input: bool,
) -> None:
    """alib generate."""
    options = AnswerOptions(
        name=name,
        package=package,
        lang=lang,
        min_sdk_version=min_sdk,
        target_sdk_version=target_sdk,
        remote_org=remote_org,
    )
    ctx.exit(
        run_generate(
            destination,
            options,
            exclude_dependencies=exclude_dependencies,
            git_fork=git_fork,
            git_remote_token=git_remote_token,
            save_answers=save_answers,
            no_input=no_input,
        )
    )


@cli.command(name="inspect-plugin", help="Show the Android configuration of a plugin.xml")
@click.argument(
    "path",
    required=False,
    default=PLUGIN_FILE,
    type=click.Path(path_type=Path),
)
@click.option("--exclude-dependencies", "--deps", "exclude_dependencies", is_flag=True,
              help="Leave out the default dependencies")
@click.pass_context
def inspect_plugin_cmd(ctx: click.Context, path: Path, exclude_dependencies: bool) -> None:
    """alib inspect-plugin."""
    plugin_path = path / PLUGIN_FILE if path.is_dir() else path
    try:
        document = load_plugin_document(plugin_path)
    except GeneratorError as exc:
        print_error(str(exc))
        ctx.exit(1)
        return

    if document is None:
        print_error(f"{plugin_path} not found or empty")
        ctx.exit(1)
        return

    extraction = extract_platform_config(
        document,
        TARGET_PLATFORM,
        exclude_dependencies=exclude_dependencies,
    )
    click.echo(yaml.safe_dump(extraction.as_dict(), sort_keys=False, default_flow_style=False))


@cli.command(name="sdk-versions", help="List the Android SDK levels offered by the prompts")
@click.option("--min-api", type=int, default=MIN_SUPPORTED_API, show_default=True,
              help="Oldest API level to list")
def sdk_versions_cmd(min_api: int) -> None:
    """alib sdk-versions."""
    defaults = {default_min_sdk(): "default minimum", default_target_sdk(): "default target"}
    for version in get_versions(min_api):
        marker = defaults.get(version.api)
        suffix = f"  [{marker}]" if marker else ""
        click.echo(f"{version.label}{suffix}")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
