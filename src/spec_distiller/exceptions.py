"""Exceptions that abort a build.

Document-local problems (missing abstract, dangling links, unknown citation
keys) are not exceptions: they are recorded as BuildIssue entries so that a
single run reports all of them.
"""


class SpecDistillerError(Exception):
    """Base exception for all fatal build errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(SpecDistillerError):
    """Raised when a build cannot proceed because its inputs are inconsistent."""

    pass


class UnknownAuthorError(ConfigurationError):
    """Raised when a declared author is not in the person registry."""

    def __init__(self, author_id: str, shortname: str):
        self.author_id = author_id
        self.shortname = shortname
        super().__init__(
            f"Author {author_id!r} declared by {shortname} is not in the person registry"
        )


class MissingTitleError(ConfigurationError):
    """Raised when a source has no <title>."""

    def __init__(self, shortname: str):
        self.shortname = shortname
        super().__init__(f"Source {shortname} has no title")


class MalformedInputError(SpecDistillerError):
    """Raised when an external JSON input is missing, unparseable or invalid."""

    def __init__(self, message: str, path=None, errors: list | None = None):
        self.path = path
        self.errors = errors or []
        super().__init__(message)
