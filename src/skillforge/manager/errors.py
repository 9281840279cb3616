"""Errors raised by skill managers."""

import skillforge.errors as errors


class SkillsManagerError(errors.SkillforgeError):
    """Base class for failures of a lifecycle operation on one skill."""

    pass


class SkillValidationError(SkillsManagerError):
    """Raised when an operation requires a valid skill and the skill is not."""

    def __init__(self, message: str, failed_checks: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.failed_checks = failed_checks or {}


class PackageError(SkillsManagerError):
    """Raised when a package cannot be written."""

    pass


class InvalidPackageError(SkillsManagerError):
    """Raised when a package file is missing, unreadable, or malformed."""

    pass


class ScaffoldError(SkillsManagerError):
    """Raised when a new skill cannot be created."""

    pass


class SkillExistsError(SkillsManagerError):
    """Raised when the target already exists and force was not given."""

    pass


class SkillNotInstalledError(SkillsManagerError):
    """Raised when updating a skill that is not installed in the scope."""

    pass
