"""
Domain Models - Pure plugin entities.

No infrastructure dependencies. Domain logic only.
"""

from vault_planetscale.domain.config import ConnectionConfig, DEFAULT_API_URL
from vault_planetscale.domain.password import BranchPassword, CreationStatement
from vault_planetscale.domain.redaction import redact, secret_map
from vault_planetscale.domain.errors import (
    PluginError,
    ConfigValidationError,
    NotInitializedError,
    ClientError,
    PlanetScaleAPIError,
    TemplateError,
    ValidationError,
    StatementError,
    EmptyStatementError,
    CredentialNotFoundError,
    AggregatedError,
)

__all__ = [
    "ConnectionConfig",
    "DEFAULT_API_URL",
    "BranchPassword",
    "CreationStatement",
    "redact",
    "secret_map",
    # Errors
    "PluginError",
    "ConfigValidationError",
    "NotInitializedError",
    "ClientError",
    "PlanetScaleAPIError",
    "TemplateError",
    "ValidationError",
    "StatementError",
    "EmptyStatementError",
    "CredentialNotFoundError",
    "AggregatedError",
]
