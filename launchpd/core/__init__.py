"""Core components for launchpd"""

from .ignore import is_ignored
from .validation_engine import ValidationEngine, StaticValidationResult, ValidationResult
from .credential_store import CredentialStore, is_valid_client_token
from .project_link import ProjectLinkStore
from .local_history import LocalHistory
from .reporter import StatusReporter, Prompter, LoggingReporter, AutoConfirmPrompter
from .quota_gate import QuotaGate
from .subdomain_resolver import SubdomainResolver, SubdomainResolution

__all__ = [
    "is_ignored",
    "ValidationEngine",
    "StaticValidationResult",
    "ValidationResult",
    "CredentialStore",
    "is_valid_client_token",
    "ProjectLinkStore",
    "LocalHistory",
    "StatusReporter",
    "Prompter",
    "LoggingReporter",
    "AutoConfirmPrompter",
    "QuotaGate",
    "SubdomainResolver",
    "SubdomainResolution",
]
