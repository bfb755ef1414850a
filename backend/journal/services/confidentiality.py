"""
Field confidentiality policy for diary records.

Scalar metadata (title, weather, mood, location, music) is protected with the
string envelope and stored in text columns. Content goes through the raw
envelope and is stored as ciphertext and nonce columns.

Rows written before encryption was enabled hold plaintext. ``reveal`` cannot
tell those apart from corrupted ciphertext, so any value that fails to open is
returned as-is instead of raising.
"""
import logging
from typing import Dict, NamedTuple, Optional, Tuple

from journal.core import crypto

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("title", "weather", "mood", "location", "music")


class Revealed(NamedTuple):
    """Outcome of revealing one stored value."""
    value: str
    decrypted: bool


class FieldCipher:
    """Applies the protect/reveal policy with an immutable key.

    A missing key disables the policy entirely: values are stored and returned
    unchanged. A key of the wrong length is rejected at construction.
    """

    def __init__(self, key: Optional[bytes] = None):
        if key is not None and len(key) != crypto.KEY_SIZE:
            raise crypto.InvalidKeyLength(f"key length must be {crypto.KEY_SIZE} bytes")
        self._key = key

    @property
    def enabled(self) -> bool:
        return self._key is not None

    def protect(self, value: Optional[str]) -> str:
        if not value or not self.enabled:
            return value or ""
        return crypto.seal_to_string(self._key, value)

    def reveal_tagged(self, value: Optional[str]) -> Revealed:
        if not value or not self.enabled:
            return Revealed(value or "", False)
        text = value.strip()
        try:
            return Revealed(crypto.open_from_string(self._key, text), True)
        except crypto.CipherError as e:
            logger.debug(f"Treating stored value as plaintext: {e}")
            return Revealed(text, False)

    def reveal(self, value: Optional[str]) -> str:
        return self.reveal_tagged(value).value

    def protect_fields(self, values: Dict[str, Optional[str]]) -> Dict[str, str]:
        """Protect the scalar fields present in ``values``."""
        return {name: self.protect(values.get(name)) for name in SCALAR_FIELDS if name in values}

    def reveal_fields(self, record) -> Dict[str, str]:
        """Revealed scalar values of ``record``. The record itself is left untouched."""
        return {name: self.reveal(getattr(record, name)) for name in SCALAR_FIELDS}

    def seal_content(self, content: Optional[str]) -> Tuple[Optional[bytes], Optional[bytes]]:
        """Return ``(ciphertext, nonce)``, or ``(None, None)`` when there is nothing to seal."""
        if not content or not self.enabled:
            return None, None
        return crypto.seal(self._key, content.encode("utf-8"))

    def open_content(self, ciphertext: Optional[bytes], nonce: Optional[bytes]) -> Optional[str]:
        if not ciphertext or not nonce or not self.enabled:
            return None
        try:
            return crypto.open_sealed(self._key, ciphertext, nonce).decode("utf-8")
        except (crypto.CipherError, UnicodeDecodeError) as e:
            logger.warning(f"Could not decrypt diary content: {e}")
            return None
