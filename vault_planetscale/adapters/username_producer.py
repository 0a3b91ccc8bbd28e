"""
Username Producer - Render credential names from a Jinja2 template.

Template context:
- display_name / DisplayName: host-supplied display name
- role_name / RoleName: host-supplied role name
- random(n): n random alphanumeric characters
- unix_time(), unix_time_millis(), timestamp(fmt), uuid()

Filters: truncate(n), lowercase, uppercase, replace(old, new), sha256, base64
"""

from datetime import datetime, timezone
from typing import Any, Dict
import base64
import hashlib
import secrets
import string
import time
import uuid

from jinja2 import Environment, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError

from vault_planetscale.domain.errors import TemplateError
from vault_planetscale.ports.database_port import UsernameMetadata

MAX_USERNAME_LENGTH = 63

DEFAULT_USERNAME_TEMPLATE = (
    '{{ "v-%s-%s-%s-%s" | format('
    "display_name | truncate(8), "
    "role_name | truncate(8), "
    "random(20) | lowercase, "
    "unix_time()) | truncate(63) }}"
)

_ALPHANUMERIC = string.ascii_letters + string.digits


def _truncate(value: Any, length: int) -> str:
    # Hard cut, unlike Jinja's builtin which appends "..."
    return str(value)[:length]


def _random(length: int) -> str:
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def _sha256(value: Any) -> str:
    return hashlib.sha256(str(value).encode()).hexdigest()


def _base64(value: Any) -> str:
    return base64.b64encode(str(value).encode()).decode()


def _timestamp(fmt: str = "%Y-%m-%dT%H:%M:%SZ") -> str:
    return datetime.now(timezone.utc).strftime(fmt)


def _build_environment() -> Environment:
    env = Environment(undefined=StrictUndefined, autoescape=False)
    env.filters.update({
        "truncate": _truncate,
        "lowercase": lambda value: str(value).lower(),
        "uppercase": lambda value: str(value).upper(),
        "replace": lambda value, old, new: str(value).replace(old, new),
        "sha256": _sha256,
        "base64": _base64,
    })
    env.globals.update({
        "random": _random,
        "unix_time": lambda: int(time.time()),
        "unix_time_millis": lambda: int(time.time() * 1000),
        "timestamp": _timestamp,
        "uuid": lambda: str(uuid.uuid4()),
    })
    return env


class UsernameProducer:
    """
    Generates usernames for new credentials.

    The template is compiled and test-rendered with empty metadata on
    construction, so a broken template fails Initialize rather than the
    first NewUser.
    """

    def __init__(self, template: str = DEFAULT_USERNAME_TEMPLATE):
        """
        Compile and validate the template.

        Args:
            template: Jinja2 template source

        Raises:
            TemplateError: Template does not compile or render
        """
        self.template_source = template
        try:
            self._template = _build_environment().from_string(template)
        except JinjaTemplateError as exc:
            raise TemplateError(f"unable to initialize username template: {exc}") from exc

        try:
            self.generate(UsernameMetadata())
        except TemplateError as exc:
            raise TemplateError(f"invalid username template: {exc}") from exc

    def generate(self, metadata: UsernameMetadata) -> str:
        """
        Render a username.

        Args:
            metadata: Display name and role name from the host

        Returns:
            Username of at most 63 characters

        Raises:
            TemplateError: Rendering failed
        """
        context: Dict[str, Any] = {
            "display_name": metadata.display_name,
            "role_name": metadata.role_name,
            "DisplayName": metadata.display_name,
            "RoleName": metadata.role_name,
        }
        try:
            rendered = self._template.render(**context)
        except (JinjaTemplateError, TypeError, ValueError) as exc:
            raise TemplateError(f"failed to generate username: {exc}") from exc

        return rendered.strip()[:MAX_USERNAME_LENGTH]
