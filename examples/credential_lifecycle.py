"""
Credential Lifecycle Example - Issue and revoke a PlanetScale branch password.

Runs against an in-memory password store. Set PLANETSCALE_SERVICE_TOKEN,
PLANETSCALE_SERVICE_TOKEN_NAME, PLANETSCALE_ORG and PLANETSCALE_DATABASE
to talk to the real API instead.
"""

import logging
import os

from vault_planetscale import new
from vault_planetscale.adapters import MemoryPasswordAdapter
from vault_planetscale.domain.errors import PluginError
from vault_planetscale.ports import (
    DeleteUserRequest,
    InitializeRequest,
    NewUserRequest,
    Statements,
    UsernameMetadata,
)


def build_backend():
    if os.environ.get("PLANETSCALE_SERVICE_TOKEN"):
        config = {
            "organization": os.environ["PLANETSCALE_ORG"],
            "database": os.environ["PLANETSCALE_DATABASE"],
            "service_token": os.environ["PLANETSCALE_SERVICE_TOKEN"],
            "token_name": os.environ["PLANETSCALE_SERVICE_TOKEN_NAME"],
        }
        return new(), config

    store = MemoryPasswordAdapter()
    config = {
        "organization": "acme",
        "database": "db1",
        "service_token": "pscale_tkn_example",
        "token_name": "vault",
    }
    return new(client_factory=lambda c: store), config


def main():
    logging.basicConfig(level=logging.INFO)
    db, config = build_backend()

    db.initialize(InitializeRequest(config=config, verify_connection=True))
    print(f"Backend type: {db.type()}")

    # Issue a read-only credential on the dev branch
    response = db.new_user(NewUserRequest(
        username_config=UsernameMetadata(display_name="alice", role_name="reader"),
        statements=Statements(commands=['{"branch": "dev", "role": "reader"}']),
    ))
    print(f"\n✓ Issued credential: {response.username}")

    # Revoke it
    db.delete_user(DeleteUserRequest(username=response.username))
    print(f"✓ Revoked credential: {response.username}")

    # Revoking again fails; the error never includes the service token
    try:
        db.delete_user(DeleteUserRequest(username=response.username))
    except PluginError as e:
        print(f"\n✗ Second revoke failed as expected: {e}")

    db.close()


if __name__ == "__main__":
    main()
