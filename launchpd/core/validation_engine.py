# launchpd/core/validation_engine.py
"""Validation engine for folders and names"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from ..api.exceptions import ValidationError
from ..constants import ALLOWED_EXTENSIONS, FORBIDDEN_INDICATORS, SUBDOMAIN_PATTERN
from .ignore import is_ignored


@dataclass
class StaticValidationResult:
    """Static content validation result container"""
    success: bool = True
    violations: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.success:
            return "✓ Only static content found"
        lines = ["Violations:"]
        for violation in self.violations:
            lines.append(f"  ✗ {violation}")
        return '\n'.join(lines)


@dataclass
class ValidationResult:
    """Generic validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)


def _extension(name: str) -> str:
    """Lowercase extension including the dot, or '' for none

    Dotfiles such as ``.env`` have no extension.
    """
    return os.path.splitext(name)[1].lower()


def is_forbidden(name: str) -> bool:
    """Whether a name or its extension marks non-static content"""
    lowered = name.lower()
    if lowered in FORBIDDEN_INDICATORS:
        return True
    ext = _extension(lowered)
    return bool(ext) and ext in FORBIDDEN_INDICATORS


class ValidationEngine:
    """Execute validation operations"""

    def validate_static_only(self, folder: Path) -> StaticValidationResult:
        """
        Check that a folder holds only static assets

        Forbidden indicators are checked first, then the ignore filter,
        then the allowed extension list. A forbidden directory is reported
        once and not descended. Files without an extension are allowed.

        Violations are reported as paths relative to ``folder`` with ``/``
        separators (``sub/app.py``), not bare file names, so the same name
        in two directories is listed twice and each entry can be located.

        Args:
            folder: Folder to validate

        Returns:
            StaticValidationResult with sorted relative POSIX violations

        Raises:
            ValidationError: The folder could not be read
        """
        root = Path(folder)
        violations: Set[str] = set()

        def on_error(error: OSError) -> None:
            raise ValidationError(f"Failed to validate folder: {error}")

        if not root.is_dir():
            raise ValidationError(f"Failed to validate folder: not a directory: {root}")

        for current, dirs, files in os.walk(root, onerror=on_error):
            current_path = Path(current)
            kept = []
            for name in sorted(dirs):
                if is_forbidden(name):
                    violations.add((current_path / name).relative_to(root).as_posix())
                elif not is_ignored(name, is_directory=True):
                    kept.append(name)
            dirs[:] = kept

            for name in files:
                rel = (current_path / name).relative_to(root).as_posix()
                if is_forbidden(name):
                    violations.add(rel)
                    continue
                if is_ignored(name):
                    continue
                ext = _extension(name)
                if ext and ext not in ALLOWED_EXTENSIONS:
                    violations.add(rel)

        ordered = sorted(violations)
        return StaticValidationResult(success=not ordered, violations=ordered)

    def validate_subdomain(self, subdomain: str) -> ValidationResult:
        """
        Validate a subdomain as a DNS label

        Args:
            subdomain: Subdomain to validate

        Returns:
            ValidationResult
        """
        result = ValidationResult()

        if not subdomain:
            result.add_error("Subdomain cannot be empty")
            return result

        if len(subdomain) > 63:
            result.add_error(f"Subdomain too long: {len(subdomain)} characters (max 63)")

        if not SUBDOMAIN_PATTERN.match(subdomain):
            result.add_error(
                f"Invalid subdomain: '{subdomain}'. "
                "Use lowercase letters, numbers and hyphens, not starting or ending with a hyphen"
            )

        return result
