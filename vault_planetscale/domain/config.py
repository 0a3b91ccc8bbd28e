"""
Connection Config Domain Model - Typed plugin configuration.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from urllib.parse import quote
import os

from vault_planetscale.domain.errors import ConfigValidationError
from vault_planetscale.domain.redaction import secret_map

DEFAULT_API_URL = "https://api.planetscale.com/v1"
API_URL_ENV = "PLANETSCALE_API_URL"

REQUIRED_FIELDS = ("organization", "database", "service_token", "token_name")


def _as_string(value: Any) -> str:
    """Weakly decode a config value to a string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


@dataclass
class ConnectionConfig:
    """
    Configuration accepted from the secrets host.

    Domain rules:
    - organization, database, service_token and token_name are required
    - connection_url is optional; {{username}} and {{password}} are substituted
    - raw_config is returned to the host unchanged
    """
    organization: str = ""
    database: str = ""
    service_token: str = ""
    token_name: str = ""
    username_template: Optional[str] = None

    # URL-based variant
    connection_url: str = ""
    username: str = ""
    password: str = ""

    raw_config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionConfig":
        """
        Decode the host's configuration map.

        Scalar values are coerced to strings and unknown keys are ignored.

        Args:
            data: Configuration map as received

        Returns:
            Typed configuration
        """
        data = data or {}
        template = data.get("username_template")
        return cls(
            organization=_as_string(data.get("organization")),
            database=_as_string(data.get("database")),
            service_token=_as_string(data.get("service_token")),
            token_name=_as_string(data.get("token_name")),
            username_template=_as_string(template) or None,
            connection_url=_as_string(data.get("connection_url")),
            username=_as_string(data.get("username")),
            password=_as_string(data.get("password")),
            raw_config=data,
        )

    def validate(self) -> None:
        """
        Check required fields before anything is constructed.

        Raises:
            ConfigValidationError: First missing required field
        """
        for name in REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ConfigValidationError(name)

    def api_url(self) -> str:
        """Resolve the API base URL."""
        if not self.connection_url:
            return os.environ.get(API_URL_ENV, DEFAULT_API_URL).rstrip("/")

        # Password is substituted verbatim, username is path-escaped
        url = self.connection_url.replace("{{username}}", quote(self.username, safe=""))
        url = url.replace("{{password}}", self.password)
        return url.rstrip("/")

    def secret_values(self) -> Dict[str, str]:
        """Raw secret value to placeholder mapping."""
        return secret_map(service_token=self.service_token, password=self.password)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize non-secret fields.

        Never includes service_token or password.
        """
        return {
            "organization": self.organization,
            "database": self.database,
            "token_name": self.token_name,
            "username_template": self.username_template,
            "connection_url": self.connection_url,
            "username": self.username,
        }
