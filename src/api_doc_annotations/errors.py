"""Exceptions raised by api-doc-annotations."""


class ApiDocError(Exception):
    """Base class for errors reported to callers."""


class UnsupportedLanguageError(ApiDocError, ValueError):
    """A snippet was requested for a language with no renderer."""

    def __init__(self, language: str, supported: tuple[str, ...]):
        self.language = language
        self.supported = supported
        super().__init__(f"Unsupported language '{language}'. Supported: {', '.join(supported)}")


class RouteFileError(ApiDocError):
    """A route file could not be read or has no usable route list."""
