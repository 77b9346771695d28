"""
Custom exception hierarchy for the Bear exporter.

Fatal errors abort the whole export run; missing attachments are not
exceptions at all and are collected on the run state instead.
"""


class BearExportError(Exception):
    """Base exception for all exporter errors."""
    pass


class SourceNotFoundError(BearExportError):
    """Raised when the source directory does not contain a Bear database."""
    pass


class DestinationError(BearExportError):
    """Raised when the destination directory is missing or not writable."""
    pass


class DatabaseError(BearExportError):
    """Raised when the source database cannot be opened or queried."""
    pass


class SchemaError(DatabaseError):
    """Raised when the notes table is missing or lacks expected columns."""
    pass


class NoteDecodeError(DatabaseError):
    """Raised when a notes row cannot be turned into a NoteRecord."""
    pass


class NoteWriteError(BearExportError):
    """Raised when a note's JSON cannot be encoded or written."""
    pass


class FileOperationError(BearExportError):
    """Raised when an attachment copy fails."""
    pass
