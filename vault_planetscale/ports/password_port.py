"""
Password Port - Outbound access to PlanetScale branch passwords.

Implementations:
- PlanetScalePasswordAdapter: PlanetScale HTTP API
- MemoryPasswordAdapter: In-memory (testing)
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from vault_planetscale.domain.password import BranchPassword


class PasswordPort(ABC):
    """Port: Create, list and delete branch passwords."""

    @abstractmethod
    def create_password(
        self,
        organization: str,
        database: str,
        branch: str,
        display_name: str,
        role: str,
        timeout: Optional[float] = None,
    ) -> BranchPassword:
        """
        Create a password on a branch.

        Args:
            organization: PlanetScale organization
            database: Database name
            branch: Branch name
            display_name: Name shown for the password (the generated username)
            role: Password role (admin, reader, writer, readwriter)
            timeout: Optional request timeout in seconds

        Returns:
            Created password, including plain_text
        """
        pass

    @abstractmethod
    def list_passwords(
        self,
        organization: str,
        database: str,
        timeout: Optional[float] = None,
    ) -> List[BranchPassword]:
        """
        List passwords across all branches of a database.

        Returns:
            Passwords in the order the platform returns them
        """
        pass

    @abstractmethod
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
        pass

    def verify(self, organization: str, timeout: Optional[float] = None) -> None:
        """Check the credentials work. Default: no check."""
        return None

    def close(self) -> None:
        """Release underlying resources."""
        return None
