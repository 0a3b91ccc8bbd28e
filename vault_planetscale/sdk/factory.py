"""
Plugin Factory - Build the backend the way the host expects to receive it.

Example:
    from vault_planetscale import new

    db = new()
    db.initialize(InitializeRequest(config={
        "organization": "acme",
        "database": "db1",
        "service_token": "pscale_tkn_...",
        "token_name": "vault",
    }))
"""

from typing import Optional

from vault_planetscale.adapters.connection_producer import ClientFactory
from vault_planetscale.adapters.error_sanitizer import ErrorSanitizerMiddleware
from vault_planetscale.adapters.planetscale_database import PlanetScaleDatabase
from vault_planetscale.ports.database_port import DatabasePort


def new(client_factory: Optional[ClientFactory] = None) -> DatabasePort:
    """
    Create a PlanetScale backend wrapped in the error sanitizer.

    Args:
        client_factory: Builds the password client (default: PlanetScale API)

    Returns:
        Backend whose errors never contain the service token or password
    """
    database = PlanetScaleDatabase(client_factory=client_factory)
    return ErrorSanitizerMiddleware(database, database.secret_values)
