"""
Error Sanitizer Middleware - Scrub secrets from every outbound error.

Wraps any DatabasePort. Secret values are looked up when an error is raised,
so a token set by Initialize is redacted from errors of later calls.
"""

from typing import Callable, Dict, Optional, TypeVar

from vault_planetscale.domain.errors import PluginError
from vault_planetscale.domain.redaction import redact
from vault_planetscale.ports.database_port import (
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

T = TypeVar("T")

SecretsFn = Callable[[], Dict[str, str]]


def sanitize(exc: Exception, secrets: Dict[str, str]) -> PluginError:
    """
    Return a scrubbed copy of an error.

    Plugin errors keep their type; anything else becomes a PluginError.
    """
    if isinstance(exc, PluginError):
        return exc.redact(secrets)
    return PluginError(redact(str(exc), secrets))


class ErrorSanitizerMiddleware(DatabasePort):
    """
    DatabasePort decorator that redacts secret values from errors.

    The scrubbed error is raised outside the except block so neither
    __cause__ nor __context__ points at the original exception, which may
    carry the raw value in its message.
    """

    def __init__(self, database: DatabasePort, secrets_fn: SecretsFn):
        """
        Wrap a backend.

        Args:
            database: Backend to wrap
            secrets_fn: Returns the current raw value to placeholder mapping
        """
        self._database = database
        self._secrets_fn = secrets_fn

    @property
    def database(self) -> DatabasePort:
        return self._database

    def _call(self, operation: Callable[..., T], *args, **kwargs) -> T:
        try:
            return operation(*args, **kwargs)
        except Exception as exc:
            error = sanitize(exc, self._secrets_fn())
        raise error

    def initialize(
        self,
        request: InitializeRequest,
        timeout: Optional[float] = None,
    ) -> InitializeResponse:
        return self._call(self._database.initialize, request, timeout=timeout)

    def new_user(
        self,
        request: NewUserRequest,
        timeout: Optional[float] = None,
    ) -> NewUserResponse:
        return self._call(self._database.new_user, request, timeout=timeout)

    def update_user(
        self,
        request: UpdateUserRequest,
        timeout: Optional[float] = None,
    ) -> UpdateUserResponse:
        return self._call(self._database.update_user, request, timeout=timeout)

    def delete_user(
        self,
        request: DeleteUserRequest,
        timeout: Optional[float] = None,
    ) -> DeleteUserResponse:
        return self._call(self._database.delete_user, request, timeout=timeout)

    def type(self) -> str:
        return self._call(self._database.type)

    def close(self) -> None:
        return self._call(self._database.close)
