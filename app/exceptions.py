"""Custom exceptions for the Catroweb backend."""


class CatrowebError(Exception):
    """Base class for application errors."""


class InvalidArchiveError(CatrowebError):
    """Uploaded archive could not be read or contains unsafe members."""

    def __init__(self, message: str, filename: str = None):
        self.filename = filename
        super().__init__(message)


class InvalidCatrobatFileError(CatrowebError):
    """Extracted program contains files that are not allowed."""

    def __init__(self, message: str, unexpected_files: list = None):
        self.unexpected_files = unexpected_files or []
        super().__init__(message)


class InvalidLikeTypeError(CatrowebError):
    """Like type outside of the known reaction set."""

    def __init__(self, like_type):
        self.like_type = like_type
        super().__init__(f"Invalid like type: {like_type}")
