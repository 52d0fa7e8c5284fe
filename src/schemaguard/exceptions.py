"""Custom exceptions for schemaguard."""


class SchemaGuardError(Exception):
    """Base exception for all schemaguard errors."""


class ConfigError(SchemaGuardError):
    """Configuration-related errors."""


class ChangelogParseError(SchemaGuardError):
    """A changelog file could not be read or parsed."""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Could not parse changelog '{file_path}': {reason}")
