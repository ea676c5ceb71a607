"""Interactive answer collection for ``alib generate``.

Prompts are skipped for every value already given on the command line;
with ``no_input`` the defaults (defaults file, then built-in) are used.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import click

from android_lib_generator.core.android_versions import (
    default_min_sdk,
    default_target_sdk,
    get_versions,
)
from android_lib_generator.core.errors import ConfigError
from android_lib_generator.core.generator_config import (
    GeneratorConfig,
    GeneratorDefaults,
    default_package,
    remote_group_id,
)
from android_lib_generator.core.plugin_config import PluginExtraction
from android_lib_generator.core.settings import (
    DEFAULT_LANG,
    DEFAULT_LIBRARY_NAME,
    SUPPORTED_LANGS,
)
from android_lib_generator.helpers.helpers_logging import print_info, print_warning
from android_lib_generator.helpers.remote_git import GitRemoteClient


@dataclass(frozen=True)
class AnswerOptions:
    """Answers passed as command line options (None = ask)."""

    name: str | None = None
    package: str | None = None
    lang: str | None = None
    min_sdk_version: int | None = None
    target_sdk_version: int | None = None
    remote_org: str | None = None


def _ask(text: str, default: Any, no_input: bool, **kwargs: Any) -> Any:
    if no_input:
        return default
    return click.prompt(text, default=default, **kwargs)


def _ask_sdk(text: str, configured: int | None, fallback: int, no_input: bool) -> int:
    versions = get_versions()
    default = fallback
    if configured is not None:
        if any(version.api == configured for version in versions):
            default = configured
        else:
            print_warning(f"{text}: API {configured} is not offered, using {fallback}")
    if no_input:
        return default
    for version in versions:
        print_info(f"  {version.label}")
    answer = click.prompt(
        text,
        default=str(default),
        type=click.Choice([str(version.api) for version in versions]),
        show_choices=False,
    )
    return int(answer)


def _ask_credentials(no_input: bool) -> GitRemoteClient:
    if no_input:
        raise ConfigError(
            "--git-fork without a token needs interactive credentials; "
            + "set GITREMOTE_TOKEN or pass --git-remote-token"
        )
    username = click.prompt("Git remote username")
    password = click.prompt("Git remote password", hide_input=True)
    return GitRemoteClient(username=username, password=password)


def _ask_remote_group(
    client: GitRemoteClient,
    remote: str,
    no_input: bool,
) -> str | None:
    organizations = client.list_organizations()
    if not organizations:
        print_warning("No remote organizations found for this account")
        return None

    organization = _ask(
        "Which remote organization/group to fork this project?",
        organizations[0],
        no_input,
        type=click.Choice(organizations),
    )
    return remote_group_id(remote, organization)


def collect_answers(
    *,
    options: AnswerOptions,
    defaults: GeneratorDefaults,
    extraction: PluginExtraction,
    fork_remote: str | None = None,
    client: GitRemoteClient | None = None,
    exclude_dependencies: bool = False,
    no_input: bool = False,
) -> GeneratorConfig:
    """Ask for every missing answer and return the frozen configuration.

    Args:
        options: Answers given as command line options
        defaults: Defaults read from android-lib.yaml
        extraction: plugin.xml extraction (provides the default package)
        fork_remote: Remote name when forking (``github``), None otherwise
        client: Authenticated remote client (token), None to ask credentials
        exclude_dependencies: Leave out the plugin's default dependencies
        no_input: Never prompt, use defaults

    Raises:
        ConfigError: If forking needs credentials under ``no_input``
        RemoteGitError: If the organization list cannot be fetched
    """
    name = options.name or _ask(
        "Name of your library",
        defaults.name or DEFAULT_LIBRARY_NAME,
        no_input,
    )

    plugin_package = extraction.package.package if extraction.package else None
    package = options.package or _ask(
        "Package name for your library",
        defaults.package or default_package(name, plugin_package),
        no_input,
    )

    remote_group = None
    if fork_remote and options.remote_org:
        remote_group = remote_group_id(fork_remote, options.remote_org)
    elif fork_remote:
        if client is None:
            client = _ask_credentials(no_input)
        remote_group = _ask_remote_group(client, fork_remote, no_input)

    lang = options.lang or _ask(
        "Java or Kotlin?",
        defaults.lang or DEFAULT_LANG,
        no_input,
        type=click.Choice(sorted(SUPPORTED_LANGS)),
    )

    min_sdk = options.min_sdk_version or _ask_sdk(
        "Minimum Android SDK",
        defaults.min_sdk_version,
        default_min_sdk(),
        no_input,
    )
    target_sdk = options.target_sdk_version or _ask_sdk(
        "Target Android SDK",
        defaults.target_sdk_version,
        default_target_sdk(),
        no_input,
    )

    return GeneratorConfig(
        name=name,
        package=package,
        lang=lang,
        min_sdk_version=min_sdk,
        target_sdk_version=target_sdk,
        remote_group=remote_group,
        exclude_dependencies=exclude_dependencies,
        extra_dependencies=defaults.dependencies,
    )
