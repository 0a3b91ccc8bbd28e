"""
PlanetScale Password Adapter - Branch passwords over the PlanetScale API.

Authenticates with a service token:
    Authorization: <token_name>:<service_token>

The service token needs the create_branch_password, read_branch and
delete_branch_password permissions on the configured database.
"""

from typing import Dict, Any, List, Optional
from urllib.parse import quote
import logging

import httpx

from vault_planetscale.domain.errors import ClientError, PlanetScaleAPIError
from vault_planetscale.domain.password import BranchPassword
from vault_planetscale.ports.password_port import PasswordPort

logger = logging.getLogger(__name__)


class PlanetScalePasswordAdapter(PasswordPort):
    """
    PlanetScale HTTP API password adapter.

    Uses a single httpx.Client per adapter instance.
    """

    def __init__(
        self,
        token_name: str,
        service_token: str,
        base_url: str = "https://api.planetscale.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize PlanetScale adapter.

        Args:
            token_name: Service token name (id)
            service_token: Service token value
            base_url: API base URL
            timeout: Default request timeout in seconds
            transport: Optional httpx transport (testing)
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"{token_name}:{service_token}",
                "Accept": "application/json",
            },
        )

    @staticmethod
    def _segment(value: str) -> str:
        """Escape one path segment; branch names may contain '/'."""
        return quote(value, safe="")

    @classmethod
    def _database_path(cls, organization: str, database: str) -> str:
        return (
            f"/organizations/{cls._segment(organization)}"
            f"/databases/{cls._segment(database)}"
        )

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """Send a request and turn failures into ClientError."""
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.debug("planetscale %s %s", method, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ClientError(f"planetscale request {method} {path} failed: {exc}") from exc

        if response.is_error:
            raise self._api_error(response)
        return response

    @staticmethod
    def _api_error(response: httpx.Response) -> PlanetScaleAPIError:
        """Build an error from the API's {code, message} body when present."""
        code = None
        message = response.reason_phrase or "request failed"
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            code = body.get("code")
            message = body.get("message") or message

        return PlanetScaleAPIError(response.status_code, message, code=code)

    def create_password(
        self,
        organization: str,
        database: str,
        branch: str,
        display_name: str,
        role: str,
        timeout: Optional[float] = None,
    ) -> BranchPassword:
        """Create a password on a branch."""
        path = (
            f"{self._database_path(organization, database)}"
            f"/branches/{self._segment(branch)}/passwords"
        )
        response = self._request(
            "POST",
            path,
            json={"name": display_name, "role": role},
            timeout=timeout,
        )
        return BranchPassword.from_api(response.json())

    def list_passwords(
        self,
        organization: str,
        database: str,
        timeout: Optional[float] = None,
    ) -> List[BranchPassword]:
        """List passwords across all branches."""
        path = f"{self._database_path(organization, database)}/passwords"
        response = self._request("GET", path, timeout=timeout)

        body = response.json()
        return [BranchPassword.from_api(item) for item in body.get("data", [])]

    def delete_password(
        self,
        organization: str,
        database: str,
        branch: str,
        display_name: str,
        password_id: str,
        timeout: Optional[float] = None,
    ) -> None:
        """Delete a password by id."""
        path = (
            f"{self._database_path(organization, database)}"
            f"/branches/{self._segment(branch)}/passwords/{self._segment(password_id)}"
        )
        self._request("DELETE", path, timeout=timeout)

    def verify(self, organization: str, timeout: Optional[float] = None) -> None:
        """Fetch the organization to prove the token works."""
        self._request("GET", f"/organizations/{self._segment(organization)}", timeout=timeout)

    def close(self) -> None:
        """Close the HTTP session."""
        self._client.close()
