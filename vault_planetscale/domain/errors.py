"""
Plugin Errors - Failures reported back to the secrets host.

Every error carries enough context to identify the failing step.
Secret values are scrubbed by ErrorSanitizerMiddleware before they leave
the plugin, so raising code never has to redact by hand.
"""

from typing import Dict, List, Optional

from vault_planetscale.domain.redaction import redact


class PluginError(Exception):
    """Base class for all plugin errors."""

    def redact(self, secrets: Dict[str, str]) -> "PluginError":
        """
        Return a copy of this error with secret values replaced.

        Args:
            secrets: Mapping of raw secret value to placeholder

        Returns:
            Error of the same type with a scrubbed message
        """
        # Bypass __init__; subclasses take structured arguments
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.args = (redact(str(self), secrets),)
        return clone


class ConfigValidationError(PluginError):
    """A required configuration field is missing."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} cannot be empty")


class NotInitializedError(PluginError):
    """Operation attempted before a successful Initialize."""

    def __init__(self, message: str = "connection has not been initialized"):
        super().__init__(message)


class ClientError(PluginError):
    """Constructing or calling the PlanetScale API client failed."""


class PlanetScaleAPIError(ClientError):
    """PlanetScale API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.code = code
        detail = f"{code}: {message}" if code else message
        super().__init__(f"planetscale api error (status {status_code}): {detail}")


class TemplateError(PluginError):
    """Username template failed to compile or render."""


class ValidationError(PluginError):
    """Malformed request arguments."""


class StatementError(ValidationError):
    """Creation statement is not a valid JSON object."""


class EmptyStatementError(PluginError):
    """NewUser called without creation statements."""

    def __init__(self, message: str = "empty creation statements"):
        super().__init__(message)


class CredentialNotFoundError(PluginError):
    """DeleteUser target is absent from the PlanetScale password listing."""

    def __init__(self, username: str, database: str, organization: str):
        self.username = username
        self.database = database
        self.organization = organization
        super().__init__(
            f"failed to find password. name: {username}, "
            f"database: {database}, organization: {organization}"
        )


class AggregatedError(PluginError):
    """
    Several independent sub-operations failed.

    Used by UpdateUser so a failing password change does not hide a failing
    expiration change requested in the same call.
    """

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        super().__init__(self._format(self.errors))

    @staticmethod
    def _format(errors: List[Exception]) -> str:
        if len(errors) == 1:
            return f"1 error occurred:\n\t* {errors[0]}"
        lines = "\n".join(f"\t* {err}" for err in errors)
        return f"{len(errors)} errors occurred:\n{lines}"

    def redact(self, secrets: Dict[str, str]) -> "AggregatedError":
        scrubbed = []
        for err in self.errors:
            if isinstance(err, PluginError):
                scrubbed.append(err.redact(secrets))
            else:
                scrubbed.append(PluginError(redact(str(err), secrets)))
        return AggregatedError(scrubbed)
