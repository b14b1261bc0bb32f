"""Exception hierarchy for proper."""


class ProperError(RuntimeError):
    """Base class for errors reported to the command line."""


class ConfigError(ProperError):
    """Raised when the configuration file cannot be parsed."""


class SourceParseError(ProperError):
    """Raised when a Go source file contains syntax errors."""


class DuplicateDeclarationError(ProperError):
    """Raised when two declarations would be emitted under the same name."""
