"""
Skill lifecycle engine.

SkillsManager is the interface the commands use for validation,
packaging, scaffolding and install/update/uninstall; LocalSkillsManager
implements it on the local filesystem.
"""

from skillforge.manager.base import (
    CheckResult,
    InstallResult,
    PackageResult,
    ScaffoldRequest,
    ScaffoldResult,
    SkillsManager,
    UninstallResult,
    UpdateResult,
    ValidationResult,
)
from skillforge.manager.errors import (
    InvalidPackageError,
    PackageError,
    ScaffoldError,
    SkillExistsError,
    SkillNotInstalledError,
    SkillsManagerError,
    SkillValidationError,
)
from skillforge.manager.local import LocalSkillsManager
from skillforge.manager.templates import (
    AGENT_MODELS,
    MEMORY_SCOPES,
    TEMPLATE_TYPES,
    TemplateOptions,
)
from skillforge.manager.validation import description_error, name_error

__all__ = [
    # Interface and results
    "SkillsManager",
    "CheckResult",
    "ValidationResult",
    "PackageResult",
    "ScaffoldRequest",
    "ScaffoldResult",
    "InstallResult",
    "UninstallResult",
    "UpdateResult",
    # Implementation
    "LocalSkillsManager",
    # Templates
    "TemplateOptions",
    "TEMPLATE_TYPES",
    "MEMORY_SCOPES",
    "AGENT_MODELS",
    # Field rules
    "name_error",
    "description_error",
    # Errors
    "SkillsManagerError",
    "SkillValidationError",
    "PackageError",
    "InvalidPackageError",
    "ScaffoldError",
    "SkillExistsError",
    "SkillNotInstalledError",
]
