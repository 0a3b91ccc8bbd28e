"""
Connection Producer - Owns plugin configuration and the cached API client.

The client is created once by init() and cached. close() drops the cached
reference without closing it, since operations already holding the client
may still be sending requests; the next get_client() lazily creates a new
one. All access to the cached client goes through one lock, so concurrent
callers never build two clients.
"""

from typing import Callable, Dict, Optional
import logging
import threading

from vault_planetscale.domain.config import ConnectionConfig
from vault_planetscale.domain.errors import ClientError, NotInitializedError, PluginError
from vault_planetscale.adapters.planetscale_passwords import PlanetScalePasswordAdapter
from vault_planetscale.ports.password_port import PasswordPort

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionConfig], PasswordPort]


def default_client_factory(config: ConnectionConfig) -> PasswordPort:
    """Build the httpx-backed PlanetScale client."""
    return PlanetScalePasswordAdapter(
        token_name=config.token_name,
        service_token=config.service_token,
        base_url=config.api_url(),
    )


class ConnectionProducer:
    """
    Lazily creates and caches the PlanetScale API client.

    Lifecycle:
    - created empty
    - init() validates config, builds the client, sets initialized
    - close() drops the client; initialized stays set
    """

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        """
        Initialize an empty producer.

        Args:
            client_factory: Builds a client from config (default: PlanetScale API)
        """
        self._client_factory = client_factory or default_client_factory
        self._lock = threading.Lock()
        self._client: Optional[PasswordPort] = None
        self.config = ConnectionConfig()
        self.initialized = False

    def init(
        self,
        config: ConnectionConfig,
        verify_connection: bool = False,
        timeout: Optional[float] = None,
    ) -> Dict:
        """
        Validate config and create the initial client.

        Replaces any prior state.

        Args:
            config: Typed configuration
            verify_connection: Call the API once to prove the token works
            timeout: Timeout for the verification call

        Returns:
            Raw configuration map

        Raises:
            ConfigValidationError: Required field missing
            ClientError: Client could not be built or verified
        """
        config.validate()

        with self._lock:
            self._drop_client()
            self.config = config
            self.initialized = False

            client = self._create_client()
            if verify_connection:
                try:
                    client.verify(config.organization, timeout=timeout)
                except PluginError:
                    client.close()
                    raise
                except Exception as exc:
                    client.close()
                    raise ClientError(f"failed to verify connection: {exc}") from exc

            self._client = client
            # Fields are set; the client can be recreated later if dropped
            self.initialized = True

        logger.debug(
            "initialized planetscale producer organization=%s database=%s",
            config.organization,
            config.database,
        )
        return config.raw_config

    def get_client(self) -> PasswordPort:
        """
        Return the cached client, creating it if needed.

        Raises:
            NotInitializedError: init() never succeeded
            ClientError: Client could not be built
        """
        with self._lock:
            if not self.initialized:
                raise NotInitializedError()

            if self._client is None:
                self._client = self._create_client()
            return self._client

    def close(self) -> None:
        """Drop the cached client reference. Safe to call repeatedly."""
        with self._lock:
            self._drop_client()

    def redaction_map(self) -> Dict[str, str]:
        """Raw secret value to placeholder mapping."""
        return self.config.secret_values()

    # Caller holds self._lock

    def _create_client(self) -> PasswordPort:
        logger.debug("creating planetscale client token_name=%s", self.config.token_name)
        try:
            return self._client_factory(self.config)
        except PluginError:
            raise
        except Exception as exc:
            raise ClientError(f"failed to create planetscale client: {exc}") from exc

    def _drop_client(self) -> None:
        # Reference only; callers outside the lock may still be using it
        self._client = None
