"""
Standard exit codes and error types for vfshell.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
DATA_ERROR = 70          # VFS source format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


def exit_with_code(code: int, message: Optional[str] = None):
    """
    Exit with a specific code and optional message.

    Args:
        code: Exit code
        message: Optional message to print to stderr
    """
    import sys
    if message:
        print(message, file=sys.stderr)
    sys.exit(code)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class VFSError(CommandError):
    """Base class for every virtual filesystem failure."""


class UninitializedError(VFSError):
    """Raised when the VFS is used before a successful init."""
    def __init__(self, message: str = "vfs not initialized"):
        super().__init__(message, GENERAL_ERROR)


# Construction errors: fatal to initialization

class ConstructionError(VFSError):
    """Raised when the serialized source cannot be turned into a tree."""
    def __init__(self, message: str):
        super().__init__(f"vfs init: {message}", DATA_ERROR)


class SourceError(ConstructionError):
    """Missing, unreadable, empty or syntactically malformed source."""


class InvalidHeaderError(ConstructionError):
    """Tabular source whose header is not path,type[,content]."""


class RelativePathError(ConstructionError):
    """A tabular record with a path that does not start with '/'."""
    def __init__(self, path: str, line: int):
        super().__init__(f"absolute path required, got {path!r} (line {line})")
        self.path = path
        self.line = line


class UnknownTypeError(ConstructionError):
    """A tabular record whose type tag is neither 'dir' nor 'file'."""
    def __init__(self, type_tag: str, line: int):
        super().__init__(f"unknown type {type_tag!r} at line {line}")
        self.type_tag = type_tag
        self.line = line


class DuplicatePathError(ConstructionError):
    """Two records describe the same path."""
    def __init__(self, path: str):
        super().__init__(f"duplicate path: {path}")
        self.path = path


class AncestorConflictError(ConstructionError):
    """A path component that must be a directory is a file."""
    def __init__(self, path: str):
        super().__init__(f"non-directory ancestor in path: {path}")
        self.path = path


class InvalidRootError(ConstructionError):
    """The root is missing or is not a directory."""
    def __init__(self, message: str = "root must be a directory"):
        super().__init__(message)


class InvalidNodeError(ConstructionError):
    """A node of a nested document is malformed."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"invalid node at {path}: {reason}")
        self.path = path


# Resolution errors: recoverable per call

class ResolutionError(VFSError):
    """Raised when a path cannot be used the way a command requires."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class NoSuchFileError(ResolutionError):
    """A path segment does not name an existing node."""
    def __init__(self, segment: str):
        super().__init__(f"no such file or directory: {segment}")
        self.segment = segment


class NotDirectoryError(ResolutionError):
    """A directory was required but the path names a file."""


class IsDirectoryError(ResolutionError):
    """A file was required but the path names a directory."""
