"""Exception hierarchy for the Android library generator.

Library code raises these; CLI commands catch ``GeneratorError``, print
the message and exit with status 1.
"""


class GeneratorError(Exception):
    """Base error for every failure the CLI reports to the user."""


class ConfigError(GeneratorError):
    """Invalid answers, options or defaults file content."""


class PluginXmlError(GeneratorError):
    """plugin.xml exists but cannot be parsed."""


class TemplateError(GeneratorError):
    """A template is missing or failed to render."""


class RemoteGitError(GeneratorError):
    """Hosted Git API request failed."""


class RemoteAuthError(RemoteGitError):
    """Hosted Git API rejected the credentials."""
