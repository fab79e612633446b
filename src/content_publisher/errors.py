"""Error taxonomy for content compilation."""

from __future__ import annotations


class PublisherError(Exception):
    """Base class for fatal compilation errors.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when this error aborts a command.
    """

    exit_code = 1


class ConfigurationError(PublisherError):
    """Raised when publisher configuration fails validation."""

    exit_code = 2


class InvalidPatternError(PublisherError):
    """Raised when a source pattern is syntactically invalid."""

    exit_code = 2


class MissingSeparatorError(PublisherError):
    """Raised when the default parser cannot find the ``---`` separator."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'could not find separator --- in "{path}"')


class InvalidAttributesError(PublisherError):
    """Raised when a page header does not evaluate to a mapping."""

    def __init__(self, path: str, detail: str | None = None) -> None:
        self.path = path
        self.detail = detail
        message = f'expected attributes for "{path}" to return a map'
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PluginError(PublisherError):
    """Raised when a highlighter plugin cannot be registered or resolved."""


class BuilderError(PublisherError):
    """Error type available to entry builders.

    The pipeline never wraps builder failures; whatever a builder raises
    propagates unchanged.
    """


class UnresolvedHighlightLanguage(LookupError):
    """Raised internally when no highlighter handles a code block language."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"no highlighter available for language {language!r}")


class ConverterWarning(UserWarning):
    """Recoverable diagnostic emitted while converting a page body.

    Converters report malformed input with
    ``warnings.warn(ConverterWarning(message, path=path, line=line))``.
    Location fields left unset are filled in by the pipeline.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line: int | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}:{self.line or 1}: warning: {self.message}"
