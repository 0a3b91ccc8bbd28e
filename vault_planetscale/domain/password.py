"""
Branch Password Domain Model - Credentials issued on a PlanetScale branch.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional
from datetime import datetime
import json

from vault_planetscale.domain.errors import StatementError

DEFAULT_BRANCH = "main"
DEFAULT_ROLE = "admin"


@dataclass
class BranchPassword:
    """
    Branch password entity - one credential on the external platform.

    Domain rules:
    - id is assigned by PlanetScale
    - name is the generated username and the lookup key for revocation
    - plain_text is never returned in to_dict() (security)
    - Never persisted locally; always re-fetched by listing
    """
    id: str
    name: str
    branch: str
    role: str = DEFAULT_ROLE

    username: Optional[str] = None
    created_at: Optional[datetime] = None

    # Only present on the create response
    plain_text: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BranchPassword":
        """Build from a PlanetScale API password object."""
        branch = data.get("database_branch") or {}
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            branch=branch.get("name", ""),
            role=data.get("role", DEFAULT_ROLE),
            username=data.get("username"),
            created_at=_parse_time(created_at) if created_at else None,
            plain_text=data.get("plain_text"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to dict.

        WARNING: plain_text is deliberately left out.
        """
        return {
            "id": self.id,
            "name": self.name,
            "branch": self.branch,
            "role": self.role,
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def _parse_time(value: str) -> datetime:
    # API returns RFC 3339 with a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class CreationStatement:
    """
    What the host asks NewUser to create.

    Parsed from the first creation statement, e.g.
    {"branch": "dev", "role": "reader"}.
    """
    branch: str = DEFAULT_BRANCH
    role: str = DEFAULT_ROLE

    @classmethod
    def parse(cls, commands: List[str]) -> "CreationStatement":
        """
        Parse the first creation statement.

        Empty or missing branch/role fall back to "main"/"admin".

        Raises:
            StatementError: Statement is not a JSON object
        """
        try:
            data = json.loads(commands[0])
        except (TypeError, ValueError) as exc:
            raise StatementError(f"invalid creation statement: {exc}") from exc

        if not isinstance(data, dict):
            raise StatementError("invalid creation statement: expected a JSON object")

        for key in ("branch", "role"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise StatementError(f"invalid creation statement: {key} must be a string")

        return cls(
            branch=data.get("branch") or DEFAULT_BRANCH,
            role=data.get("role") or DEFAULT_ROLE,
        )
