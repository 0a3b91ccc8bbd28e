"""
Unit tests for UsernameProducer.
"""

import re
import time

import pytest
from vault_planetscale.adapters.username_producer import (
    UsernameProducer,
    DEFAULT_USERNAME_TEMPLATE,
    MAX_USERNAME_LENGTH,
)
from vault_planetscale.domain.errors import TemplateError
from vault_planetscale.ports.database_port import UsernameMetadata


DEFAULT_PATTERN = re.compile(r"^v-(?P<display>[^-]*)-(?P<role>[^-]*)-(?P<random>[a-z0-9]{20})-(?P<ts>\d+)$")


def test_default_template_format():
    """Display name with empty role: v-alice--<random20>-<timestamp>."""
    producer = UsernameProducer()
    before = int(time.time())

    username = producer.generate(UsernameMetadata(display_name="alice"))

    match = DEFAULT_PATTERN.match(username)
    assert match is not None, username
    assert match.group("display") == "alice"
    assert match.group("role") == ""
    assert before <= int(match.group("ts")) <= int(time.time())


def test_default_template_truncates_names():
    producer = UsernameProducer()

    username = producer.generate(UsernameMetadata(
        display_name="averyveryverylongdisplayname",
        role_name="administrator",
    ))

    match = DEFAULT_PATTERN.match(username)
    assert match.group("display") == "averyver"
    assert match.group("role") == "administ"


def test_generate_differs_per_call():
    """Random component changes; both names stay within the limit."""
    producer = UsernameProducer()
    metadata = UsernameMetadata(display_name="alice", role_name="reader")

    first = producer.generate(metadata)
    second = producer.generate(metadata)

    assert first != second
    for username in (first, second):
        assert len(username) <= MAX_USERNAME_LENGTH
        assert "alice" in username
        assert "reader" in username


def test_output_capped_at_63_characters():
    producer = UsernameProducer("{{ random(100) }}")

    assert len(producer.generate(UsernameMetadata())) == MAX_USERNAME_LENGTH


def test_custom_template_with_filters():
    producer = UsernameProducer("{{ display_name | uppercase }}_{{ role_name | replace('-', '_') }}")

    username = producer.generate(UsernameMetadata(display_name="bob", role_name="read-only"))

    assert username == "BOB_read_only"


def test_vault_style_aliases():
    producer = UsernameProducer("{{ DisplayName }}-{{ RoleName }}")

    assert producer.generate(UsernameMetadata(display_name="a", role_name="b")) == "a-b"


def test_syntax_error_fails_on_construction():
    with pytest.raises(TemplateError) as exc_info:
        UsernameProducer("{{ display_name ")

    assert "unable to initialize username template" in str(exc_info.value)


def test_render_error_fails_on_construction():
    """Unknown variables are caught by the empty-metadata test render."""
    with pytest.raises(TemplateError) as exc_info:
        UsernameProducer("{{ no_such_field }}")

    assert "invalid username template" in str(exc_info.value)


def test_default_template_is_kept():
    assert UsernameProducer().template_source == DEFAULT_USERNAME_TEMPLATE
