"""Sifflet API token storage using the system keychain.

Resolution order:
1. ``SIFFLET_TOKEN`` environment variable (CI/automation)
2. System keychain (local development)

Usage:
    from sifflet_sources.credentials import TokenStore

    store = TokenStore()
    token = store.get()
    store.set(token)
    store.delete()
"""

from __future__ import annotations

import logging
import os

import keyring
import keyring.errors

logger = logging.getLogger(__name__)

# Service name used for all keychain entries
SERVICE_NAME = "sifflet-sources"
TOKEN_KEY = "api-token"
SIFFLET_TOKEN_ENV = "SIFFLET_TOKEN"


class TokenStore:
    """API token lookup with environment and keychain fallback."""

    def __init__(self, service_name: str = SERVICE_NAME) -> None:
        self.service_name = service_name

    def get(self) -> str | None:
        """Return the token, or None when neither source has one."""
        env_value = os.environ.get(SIFFLET_TOKEN_ENV)
        if env_value:
            return env_value

        try:
            keychain_value = keyring.get_password(self.service_name, TOKEN_KEY)
        except keyring.errors.KeyringError as e:
            # Keychain not available (e.g., headless CI without keychain)
            logger.debug("Keychain unavailable: %s", e)
            return None
        return keychain_value or None

    def source(self) -> str | None:
        """Where the token comes from: "env", "keychain" or None."""
        if os.environ.get(SIFFLET_TOKEN_ENV):
            return "env"
        try:
            if keyring.get_password(self.service_name, TOKEN_KEY):
                return "keychain"
        except keyring.errors.KeyringError:
            return None
        return None

    def set(self, value: str) -> bool:
        """Store the token in the keychain.

        Returns:
            True if stored, False if the keychain is unavailable
        """
        try:
            keyring.set_password(self.service_name, TOKEN_KEY, value)
            return True
        except keyring.errors.KeyringError:
            return False

    def delete(self) -> bool:
        """Remove the token from the keychain.

        Returns:
            True if deleted, False if it was not set or the keychain is unavailable
        """
        try:
            keyring.delete_password(self.service_name, TOKEN_KEY)
            return True
        except keyring.errors.KeyringError:
            return False
