"""
SDK - Entry points for hosts embedding the backend.
"""

from vault_planetscale.sdk.factory import new

__all__ = ["new"]
