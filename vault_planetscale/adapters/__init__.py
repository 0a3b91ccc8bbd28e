"""
Adapters - Implementations of ports.

Backend:
- PlanetScaleDatabase: Credential lifecycle (Initialize/NewUser/UpdateUser/DeleteUser)
- ErrorSanitizerMiddleware: Redacts secrets from errors
- ConnectionProducer: Cached, lock-guarded API client
- UsernameProducer: Template-based username generation

PlanetScale access:
- PlanetScalePasswordAdapter: PlanetScale HTTP API
- MemoryPasswordAdapter: In-memory passwords (testing)
"""

# Backend
from vault_planetscale.adapters.planetscale_database import PlanetScaleDatabase
from vault_planetscale.adapters.error_sanitizer import ErrorSanitizerMiddleware
from vault_planetscale.adapters.connection_producer import ConnectionProducer
from vault_planetscale.adapters.username_producer import UsernameProducer, DEFAULT_USERNAME_TEMPLATE

# PlanetScale access
from vault_planetscale.adapters.planetscale_passwords import PlanetScalePasswordAdapter
from vault_planetscale.adapters.memory_passwords import MemoryPasswordAdapter

__all__ = [
    # Backend
    "PlanetScaleDatabase",
    "ErrorSanitizerMiddleware",
    "ConnectionProducer",
    "UsernameProducer",
    "DEFAULT_USERNAME_TEMPLATE",
    # PlanetScale access
    "PlanetScalePasswordAdapter",
    "MemoryPasswordAdapter",
]
