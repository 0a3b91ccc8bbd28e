"""
Unit tests for redaction and plugin errors.
"""

from vault_planetscale.domain.redaction import redact, secret_map
from vault_planetscale.domain.errors import (
    AggregatedError,
    ClientError,
    CredentialNotFoundError,
    PlanetScaleAPIError,
    PluginError,
    ValidationError,
)


def test_secret_map_skips_empty_values():
    assert secret_map(service_token="tok") == {"tok": "[ServiceToken]"}
    assert secret_map() == {}


def test_redact_replaces_all_occurrences():
    text = redact("token tok rejected, tok again", {"tok": "[ServiceToken]"})
    assert text == "token [ServiceToken] rejected, [ServiceToken] again"


def test_redact_longest_secret_first():
    """A secret containing another is replaced whole."""
    secrets = {"abc": "[short]", "abcdef": "[long]"}
    assert redact("value=abcdef", secrets) == "value=[long]"


def test_redact_ignores_empty_key():
    assert redact("unchanged", {"": "[x]"}) == "unchanged"


def test_plugin_error_redact_keeps_type():
    """Redacted copy has the same class and the original is untouched."""
    error = ClientError("bad token pscale_tkn_123")
    scrubbed = error.redact({"pscale_tkn_123": "[ServiceToken]"})

    assert isinstance(scrubbed, ClientError)
    assert str(scrubbed) == "bad token [ServiceToken]"
    assert "pscale_tkn_123" in str(error)


def test_credential_not_found_message():
    error = CredentialNotFoundError("v-alice", "db1", "acme")

    assert "name: v-alice" in str(error)
    assert "database: db1" in str(error)
    assert "organization: acme" in str(error)


def test_aggregated_error_lists_every_failure():
    error = AggregatedError([ValidationError("first"), ClientError("second")])

    assert len(error.errors) == 2
    assert "2 errors occurred" in str(error)
    assert "* first" in str(error)
    assert "* second" in str(error)


def test_aggregated_error_redacts_each_failure():
    error = AggregatedError([ClientError("tok leaked"), RuntimeError("tok again")])
    scrubbed = error.redact({"tok": "[ServiceToken]"})

    assert isinstance(scrubbed, AggregatedError)
    assert "tok " not in str(scrubbed)
    assert isinstance(scrubbed.errors[0], ClientError)
    assert isinstance(scrubbed.errors[1], PluginError)


def test_structured_errors_survive_redaction():
    """Errors with structured constructors are copied without re-running __init__."""
    api_error = PlanetScaleAPIError(401, "bad token tok", code="unauthorized")
    not_found = CredentialNotFoundError("v-tok", "db1", "acme")

    scrubbed_api = api_error.redact({"tok": "[ServiceToken]"})
    scrubbed_missing = not_found.redact({"tok": "[ServiceToken]"})

    assert scrubbed_api.status_code == 401
    assert scrubbed_api.code == "unauthorized"
    assert "bad token [ServiceToken]" in str(scrubbed_api)
    assert isinstance(scrubbed_missing, CredentialNotFoundError)
    assert "v-[ServiceToken]" in str(scrubbed_missing)
