"""
Ports - Interfaces between the secrets host, the backend and PlanetScale.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from vault_planetscale.ports.database_port import (
    DatabasePort,
    UsernameMetadata,
    Statements,
    InitializeRequest,
    InitializeResponse,
    NewUserRequest,
    NewUserResponse,
    ChangePassword,
    ChangeExpiration,
    UpdateUserRequest,
    UpdateUserResponse,
    DeleteUserRequest,
    DeleteUserResponse,
)
from vault_planetscale.ports.password_port import PasswordPort

__all__ = [
    # Inbound (host -> backend)
    "DatabasePort",
    "UsernameMetadata",
    "Statements",
    "InitializeRequest",
    "InitializeResponse",
    "NewUserRequest",
    "NewUserResponse",
    "ChangePassword",
    "ChangeExpiration",
    "UpdateUserRequest",
    "UpdateUserResponse",
    "DeleteUserRequest",
    "DeleteUserResponse",
    # Outbound (backend -> PlanetScale)
    "PasswordPort",
]
