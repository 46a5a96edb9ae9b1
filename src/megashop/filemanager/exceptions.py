"""File manager exceptions."""


class FileManagerError(Exception):
    """Base exception for file manager errors."""


class InvalidPathError(FileManagerError):
    """Path outside the uploads directory."""


class StoredFileNotFoundError(FileManagerError):
    """No file at the given path."""
