"""
Database Port - The contract the secrets host drives.

Mirrors the host's database plugin interface:
- Initialize: accept and validate configuration
- NewUser: issue a credential
- UpdateUser: rotate password / change expiration
- DeleteUser: revoke a credential
- Type: backend identifier
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, List, Optional


@dataclass
class UsernameMetadata:
    """Request metadata used to render usernames."""
    display_name: str = ""
    role_name: str = ""


@dataclass
class Statements:
    """Creation/revocation statements supplied by the host."""
    commands: List[str] = field(default_factory=list)


@dataclass
class InitializeRequest:
    config: Dict[str, Any]
    verify_connection: bool = False


@dataclass
class InitializeResponse:
    config: Dict[str, Any]


@dataclass
class NewUserRequest:
    username_config: UsernameMetadata = field(default_factory=UsernameMetadata)
    statements: Statements = field(default_factory=Statements)
    rollback_statements: Statements = field(default_factory=Statements)

    # Generated by the host; PlanetScale mints its own password
    password: Optional[str] = None
    expiration: Optional[datetime] = None


@dataclass
class NewUserResponse:
    username: str


@dataclass
class ChangePassword:
    new_password: str
    statements: Statements = field(default_factory=Statements)


@dataclass
class ChangeExpiration:
    new_expiration: datetime
    statements: Statements = field(default_factory=Statements)


@dataclass
class UpdateUserRequest:
    username: str
    password: Optional[ChangePassword] = None
    expiration: Optional[ChangeExpiration] = None


@dataclass
class UpdateUserResponse:
    pass


@dataclass
class DeleteUserRequest:
    username: str
    statements: Statements = field(default_factory=Statements)


@dataclass
class DeleteUserResponse:
    pass


class DatabasePort(ABC):
    """
    Port: Credential lifecycle backend.

    Every operation takes an optional timeout (seconds) that is passed
    through to the outbound API call. Implementations never retry.
    """

    @abstractmethod
    def initialize(
        self,
        request: InitializeRequest,
        timeout: Optional[float] = None,
    ) -> InitializeResponse:
        """
        Validate configuration and prepare the API client.

        Raises:
            ConfigValidationError: Required field missing
            TemplateError: Username template invalid
            ClientError: Client could not be created or verified
        """
        pass

    @abstractmethod
    def new_user(
        self,
        request: NewUserRequest,
        timeout: Optional[float] = None,
    ) -> NewUserResponse:
        """
        Issue a new credential.

        Raises:
            EmptyStatementError: No creation statements
            ClientError: Client unavailable or create call failed
        """
        pass

    @abstractmethod
    def update_user(
        self,
        request: UpdateUserRequest,
        timeout: Optional[float] = None,
    ) -> UpdateUserResponse:
        """
        Change password and/or expiration of an existing credential.

        Raises:
            ValidationError: Missing username or no change requested
            AggregatedError: One or more changes failed
        """
        pass

    @abstractmethod
    def delete_user(
        self,
        request: DeleteUserRequest,
        timeout: Optional[float] = None,
    ) -> DeleteUserResponse:
        """
        Revoke a credential.

        Raises:
            CredentialNotFoundError: No credential with that name
            ClientError: Listing or deletion failed
        """
        pass

    @abstractmethod
    def type(self) -> str:
        """Backend type identifier."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the API client."""
        pass
