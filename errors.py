"""errors.py — Fatal build errors. Every one aborts the build with no output."""

from pathlib import Path


class Md2EpubError(Exception):
    """Base class for every error the CLI reports and exits on."""


class ConfigError(Md2EpubError):
    """No chapters declared, or a malformed config document."""

    def __init__(self, message: str, location: str | None = None):
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class ChapterReadError(Md2EpubError):
    def __init__(self, chapter, path: Path, reason: str = ""):
        self.chapter = chapter
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Error reading chapter {chapter} from '{path}'{detail}")


class AssetMissingError(Md2EpubError):
    def __init__(self, role: str, path: Path):
        self.role = role
        self.path = path
        super().__init__(f"{role.capitalize()} file doesn't exist: {path}")


class DuplicateIdError(Md2EpubError):
    """Two chapters resolve to the same manifest/navigation id."""

    def __init__(self, ident: str, first, second):
        self.ident = ident
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate id '{ident}': chapter {second} collides with chapter {first}"
        )


class DuplicateFileNameError(DuplicateIdError):
    """Two chapters would be written to the same HTML file."""

    def __init__(self, file_name: str, first, second):
        self.ident = file_name
        self.first = first
        self.second = second
        Md2EpubError.__init__(
            self,
            f"Duplicate page '{file_name}': chapter {second} collides with {first}",
        )


class PackagingError(Md2EpubError):
    """Writing the scratch directory or committing the archive failed."""
