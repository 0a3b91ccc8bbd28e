"""
PlanetScale Database - Credential lifecycle backend for the secrets host.

Issues branch passwords on PlanetScale as short-lived database credentials:
- NewUser: create a password on the requested branch
- DeleteUser: find the password by name and delete it
- UpdateUser: accepted but not applied (PlanetScale cannot mutate passwords)

Creation statement (first element of statements.commands):
    {"branch": "main", "role": "admin"}
"""

from typing import Callable, Dict, List, Optional
import logging

from vault_planetscale.adapters.connection_producer import ClientFactory, ConnectionProducer
from vault_planetscale.adapters.username_producer import (
    DEFAULT_USERNAME_TEMPLATE,
    UsernameProducer,
)
from vault_planetscale.domain.config import ConnectionConfig
from vault_planetscale.domain.errors import (
    AggregatedError,
    ClientError,
    CredentialNotFoundError,
    EmptyStatementError,
    NotInitializedError,
    ValidationError,
)
from vault_planetscale.domain.password import CreationStatement
from vault_planetscale.ports.database_port import (
    ChangeExpiration,
    ChangePassword,
    DatabasePort,
    DeleteUserRequest,
    DeleteUserResponse,
    InitializeRequest,
    InitializeResponse,
    NewUserRequest,
    NewUserResponse,
    UpdateUserRequest,
    UpdateUserResponse,
)
from vault_planetscale.ports.password_port import PasswordPort

logger = logging.getLogger(__name__)

PLANETSCALE_TYPE_NAME = "planetscale"


class PlanetScaleDatabase(DatabasePort):
    """
    PlanetScale credential backend.

    The connection producer's lock only guards fetching the cached client.
    API calls run outside it, so credentials can be issued concurrently.
    """

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        """
        Initialize an uninitialized backend.

        Args:
            client_factory: Builds the password client (default: PlanetScale API)
        """
        self.producer = ConnectionProducer(client_factory=client_factory)
        self._username_producer: Optional[UsernameProducer] = None

    @property
    def config(self) -> ConnectionConfig:
        return self.producer.config

    def secret_values(self) -> Dict[str, str]:
        """Raw secret value to placeholder mapping."""
        return self.producer.redaction_map()

    def initialize(
        self,
        request: InitializeRequest,
        timeout: Optional[float] = None,
    ) -> InitializeResponse:
        """
        Validate configuration, build the username template and the client.

        The template is checked before any state changes, so a bad template
        leaves the backend as it was.
        """
        config = ConnectionConfig.from_dict(request.config)
        config.validate()
        username_producer = UsernameProducer(
            config.username_template or DEFAULT_USERNAME_TEMPLATE
        )

        raw_config = self.producer.init(
            config,
            verify_connection=request.verify_connection,
            timeout=timeout,
        )
        self._username_producer = username_producer

        logger.info(
            "planetscale backend initialized for %s/%s",
            config.organization,
            config.database,
        )
        return InitializeResponse(config=raw_config)

    def type(self) -> str:
        return PLANETSCALE_TYPE_NAME

    def new_user(
        self,
        request: NewUserRequest,
        timeout: Optional[float] = None,
    ) -> NewUserResponse:
        """
        Create a branch password named after a generated username.

        The password minted by PlanetScale is not returned to the host.
        """
        if not request.statements.commands:
            raise EmptyStatementError()

        client = self._client()
        statement = CreationStatement.parse(request.statements.commands)
        username = self._require_username_producer().generate(request.username_config)

        config = self.config
        # TODO: pass request.expiration once PlanetScale passwords support a TTL
        try:
            client.create_password(
                config.organization,
                config.database,
                statement.branch,
                username,
                statement.role,
                timeout=timeout,
            )
        except Exception as exc:
            raise ClientError(f"unable to create password: {exc}") from exc

        logger.info(
            "issued planetscale password %s on branch %s with role %s",
            username,
            statement.branch,
            statement.role,
        )
        return NewUserResponse(username=username)

    def update_user(
        self,
        request: UpdateUserRequest,
        timeout: Optional[float] = None,
    ) -> UpdateUserResponse:
        """
        Apply each requested change independently.

        Failures are collected and raised together.
        """
        if not request.username:
            raise ValidationError("missing username")
        if request.password is None and request.expiration is None:
            raise ValidationError("no changes requested")

        errors: List[Exception] = []
        if request.password is not None:
            self._collect(errors, self._change_user_password, request.username, request.password)
        if request.expiration is not None:
            self._collect(errors, self._change_user_expiration, request.username, request.expiration)

        if errors:
            raise AggregatedError(errors)
        return UpdateUserResponse()

    @staticmethod
    def _collect(errors: List[Exception], change: Callable, *args) -> None:
        try:
            change(*args)
        except Exception as exc:
            errors.append(exc)

    def _change_user_password(self, username: str, change: ChangePassword) -> None:
        """Not supported by PlanetScale; accepted as a no-op."""
        logger.debug("password change for %s ignored", username)

    def _change_user_expiration(self, username: str, change: ChangeExpiration) -> None:
        """Not supported by PlanetScale; accepted as a no-op."""
        logger.debug("expiration change for %s ignored", username)

    def delete_user(
        self,
        request: DeleteUserRequest,
        timeout: Optional[float] = None,
    ) -> DeleteUserResponse:
        """Find the password whose name equals the username and delete it."""
        if not request.username:
            raise ValidationError("missing username")

        client = self._client()
        config = self.config

        try:
            passwords = client.list_passwords(
                config.organization,
                config.database,
                timeout=timeout,
            )
        except Exception as exc:
            raise ClientError(f"failed to list existing passwords: {exc}") from exc

        match = next((p for p in passwords if p.name == request.username), None)
        if match is None:
            raise CredentialNotFoundError(
                request.username,
                config.database,
                config.organization,
            )

        try:
            client.delete_password(
                config.organization,
                config.database,
                match.branch,
                request.username,
                match.id,
                timeout=timeout,
            )
        except Exception as exc:
            raise ClientError(f"failed to delete password {match.id}: {exc}") from exc

        logger.info("revoked planetscale password %s on branch %s", request.username, match.branch)
        return DeleteUserResponse()

    def close(self) -> None:
        self.producer.close()

    def _client(self) -> PasswordPort:
        """Fetch the cached client; ClientError on construction failure."""
        try:
            return self.producer.get_client()
        except NotInitializedError:
            raise
        except Exception as exc:
            raise ClientError(f"unable to get client: {exc}") from exc

    def _require_username_producer(self) -> UsernameProducer:
        if self._username_producer is None:
            raise NotInitializedError()
        return self._username_producer
