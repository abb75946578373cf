"""
Error taxonomy shared by the activity report and the status dump tagger.
"""


class ActivityError(Exception):
    """Base class for all errors raised by this project."""


class ValidationError(ActivityError):
    """Bad or missing command-line input. Raised before any network or file I/O."""


class InvalidRange(ValidationError):
    """A supplied date does not parse, or the start date is after the end date."""


class FileNotFound(ValidationError):
    """A file argument points at a path that does not exist."""


class InvalidFileType(ValidationError):
    """A file argument has the wrong extension."""


class FetchFailed(ActivityError):
    """A GitHub request (or one page of a paginated request) failed."""

    def __init__(self, message: str, status: int = 0, url: str = ""):
        super().__init__(message)
        self.status = status
        self.url = url
