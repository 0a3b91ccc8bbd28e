"""
Secret redaction - scrub sensitive values out of outbound text.
"""

from typing import Dict

REDACTED_SERVICE_TOKEN = "[ServiceToken]"
REDACTED_PASSWORD = "[password]"


def secret_map(service_token: str = "", password: str = "") -> Dict[str, str]:
    """
    Build the raw-value to placeholder mapping.

    Empty values are left out; replacing "" would mangle every message.
    """
    secrets = {}
    if service_token:
        secrets[service_token] = REDACTED_SERVICE_TOKEN
    if password:
        secrets[password] = REDACTED_PASSWORD
    return secrets


def redact(text: str, secrets: Dict[str, str]) -> str:
    """
    Replace every secret value in text by its placeholder.

    Args:
        text: Message to scrub
        secrets: Mapping of raw value to placeholder

    Returns:
        Scrubbed text
    """
    # Longest first so a secret containing another is replaced whole
    for value in sorted(secrets, key=len, reverse=True):
        if value:
            text = text.replace(value, secrets[value])
    return text
