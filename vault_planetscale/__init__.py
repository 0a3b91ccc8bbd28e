"""
Vault PlanetScale - Database credential backend for PlanetScale.

Issues PlanetScale branch passwords as short-lived credentials on behalf
of a secrets host (HashiCorp Vault database secrets engine contract).

Usage:
    from vault_planetscale import new
    from vault_planetscale.ports import InitializeRequest, NewUserRequest, Statements

    db = new()
    db.initialize(InitializeRequest(config={
        "organization": "acme",
        "database": "db1",
        "service_token": "pscale_tkn_...",
        "token_name": "vault",
    }))

    # Issue a credential on the dev branch
    resp = db.new_user(NewUserRequest(
        statements=Statements(commands=['{"branch": "dev", "role": "reader"}']),
    ))
"""

__version__ = "0.1.0"

from vault_planetscale.sdk.factory import new
from vault_planetscale.adapters.planetscale_database import PlanetScaleDatabase, PLANETSCALE_TYPE_NAME
from vault_planetscale.domain.config import ConnectionConfig
from vault_planetscale.domain.password import BranchPassword

__all__ = [
    "new",
    "PlanetScaleDatabase",
    "PLANETSCALE_TYPE_NAME",
    "ConnectionConfig",
    "BranchPassword",
]
