"""
Memory Password Adapter - In-memory branch passwords (testing only).
"""

from typing import Dict, Any, List, Optional, Tuple
from datetime import datetime, timezone
import secrets
import threading

from vault_planetscale.domain.errors import ClientError
from vault_planetscale.domain.password import BranchPassword
from vault_planetscale.ports.password_port import PasswordPort


class MemoryPasswordAdapter(PasswordPort):
    """
    In-memory password storage.

    WARNING: Only for testing. Passwords are lost on restart.

    Every call is recorded in `calls` as (operation, arguments) so tests
    can assert what would have been sent to PlanetScale.
    """

    def __init__(self, fail_on: Optional[Dict[str, Exception]] = None):
        """
        Initialize in-memory storage.

        Args:
            fail_on: Operation name to exception raised when it is called
        """
        self._passwords: Dict[Tuple[str, str], List[BranchPassword]] = {}
        self._fail_on = fail_on or {}
        self._lock = threading.Lock()
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.closed = False

    def _record(self, operation: str, **arguments: Any) -> None:
        self.calls.append((operation, arguments))
        if operation in self._fail_on:
            raise self._fail_on[operation]

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        """Arguments of every recorded call to one operation."""
        return [args for op, args in self.calls if op == operation]

    def add(self, organization: str, database: str, password: BranchPassword) -> None:
        """Seed an existing password."""
        with self._lock:
            self._passwords.setdefault((organization, database), []).append(password)

    def create_password(
        self,
        organization: str,
        database: str,
        branch: str,
        display_name: str,
        role: str,
        timeout: Optional[float] = None,
    ) -> BranchPassword:
        """Create a password in memory."""
        self._record(
            "create_password",
            organization=organization,
            database=database,
            branch=branch,
            display_name=display_name,
            role=role,
        )
        password = BranchPassword(
            id=secrets.token_hex(6),
            name=display_name,
            branch=branch,
            role=role,
            username=secrets.token_hex(6),
            created_at=datetime.now(timezone.utc),
            plain_text=f"pscale_pw_{secrets.token_urlsafe(24)}",
        )
        self.add(organization, database, password)
        return password

    def list_passwords(
        self,
        organization: str,
        database: str,
        timeout: Optional[float] = None,
    ) -> List[BranchPassword]:
        """List passwords in insertion order."""
        self._record("list_passwords", organization=organization, database=database)
        with self._lock:
            return list(self._passwords.get((organization, database), []))

    def delete_password(
        self,
        organization: str,
        database: str,
        branch: str,
        display_name: str,
        password_id: str,
        timeout: Optional[float] = None,
    ) -> None:
        """Delete a password from memory."""
        self._record(
            "delete_password",
            organization=organization,
            database=database,
            branch=branch,
            display_name=display_name,
            password_id=password_id,
        )
        with self._lock:
            passwords = self._passwords.get((organization, database), [])
            for password in passwords:
                if password.id == password_id and password.branch == branch:
                    passwords.remove(password)
                    return
        raise ClientError(f"password {password_id} not found on branch {branch}")

    def verify(self, organization: str, timeout: Optional[float] = None) -> None:
        self._record("verify", organization=organization)

    def close(self) -> None:
        self.closed = True
