"""Access gate guarding the ledger behind a locally stored password."""

import base64
import binascii
import hmac
import logging
import os
from hashlib import pbkdf2_hmac
from typing import Optional

from cashledger.database.base import RecordStore
from cashledger.domain.entities import PASSWORD_CONFIG_KEY, ConfigEntry
from cashledger.domain.errors import AuthError, ValidationError, no_secret_set

logger = logging.getLogger(__name__)

PBKDF2_SCHEME = "pbkdf2"
PBKDF2_ITERATIONS = 310_000


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.b64decode(text.encode("ascii"), validate=True)


def encode_secret(secret: str, *, iterations: int = PBKDF2_ITERATIONS, salt: Optional[bytes] = None) -> str:
    """Salted PBKDF2-SHA256 digest in ``pbkdf2$<iterations>$<salt>$<digest>`` form."""
    salt = salt or os.urandom(16)
    digest = pbkdf2_hmac("sha256", secret.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_SCHEME}${iterations}${_b64(salt)}${_b64(digest)}"


def legacy_encode_secret(secret: str) -> str:
    """Reversible base64 form written by earlier versions of the ledger."""
    return _b64(secret.encode("utf-8"))


def is_legacy_encoding(stored: str) -> bool:
    return not stored.startswith(f"{PBKDF2_SCHEME}$")


def verify_secret(secret: str, stored: str) -> bool:
    """Check ``secret`` against a stored encoding in constant time."""
    if is_legacy_encoding(stored):
        return hmac.compare_digest(legacy_encode_secret(secret).encode("ascii"), stored.encode("utf-8"))
    try:
        _, s_iter, s_salt, s_digest = stored.split("$", 3)
        iterations = int(s_iter)
        salt = _unb64(s_salt)
        expected = _unb64(s_digest)
        candidate = pbkdf2_hmac("sha256", secret.encode("utf-8"), salt, iterations)
    except (ValueError, OverflowError, binascii.Error):
        logger.error("Stored password entry is malformed")
        return False
    return hmac.compare_digest(candidate, expected)


class AccessGate:
    """Two-state gate: unauthenticated until the stored secret is presented.

    With no secret stored, setting one authenticates immediately.
    """

    def __init__(self, store: RecordStore, iterations: int = PBKDF2_ITERATIONS):
        self.store = store
        self.iterations = iterations
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def has_secret(self) -> bool:
        return self.store.get_config(PASSWORD_CONFIG_KEY) is not None

    def set_secret(self, secret: str) -> None:
        """Store a new secret and open the session.

        Replacing an existing secret requires an authenticated session.

        Raises:
            ValidationError: If the secret is empty
            AuthError: If a secret exists and the gate is not authenticated
        """
        if not secret:
            raise ValidationError("Password must not be empty")
        if self.has_secret() and not self._authenticated:
            raise AuthError("A password is already set; log in to change it")

        self.store.set_config(
            ConfigEntry(key=PASSWORD_CONFIG_KEY, value=encode_secret(secret, iterations=self.iterations))
        )
        self._authenticated = True
        logger.info("Password stored")

    def change_secret(self, current: str, new: str) -> None:
        """Verify ``current`` then replace it with ``new``."""
        self.login(current)
        self.set_secret(new)

    def login(self, secret: str) -> None:
        """Open the session if ``secret`` matches the stored one.

        A legacy base64 entry is rewritten as a PBKDF2 digest on success.

        Raises:
            AuthError: If no secret is stored or the secret is wrong
        """
        entry = self.store.get_config(PASSWORD_CONFIG_KEY)
        if entry is None:
            raise AuthError(no_secret_set())

        if not verify_secret(secret, entry.value):
            self._authenticated = False
            logger.warning("Login failed: incorrect password")
            raise AuthError("Incorrect password")

        self._authenticated = True
        if is_legacy_encoding(entry.value):
            self.store.set_config(
                ConfigEntry(key=PASSWORD_CONFIG_KEY, value=encode_secret(secret, iterations=self.iterations))
            )
            logger.info("Upgraded stored password to a salted hash")

    def logout(self) -> None:
        self._authenticated = False

    def require_authenticated(self) -> None:
        if not self._authenticated:
            raise AuthError("Not logged in")
