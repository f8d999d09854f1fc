"""Passphrase based authenticated encryption of opaque blobs.

Every blob is AES-256-GCM sealed under a key derived from the passphrase and
stored as ``nonce || ciphertext || tag``. A fresh nonce is drawn for every
call, so encrypting the same plaintext twice yields different blobs.

The key is the hex encoded MD5 digest of the passphrase. This keeps existing
secrets files readable but offers no resistance against brute forcing the
passphrase.
"""

import hashlib
import hmac

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from strongbox import AuthenticationError, CorruptDataError

from . import entropy as _entropy

NONCE_SIZE = 12
TAG_SIZE = 16

CHECKSUM_PHRASE = b"checksumToEnsureThatThePassPhraseIsAlwaysTheSame"


def derive_key(passphrase: str) -> bytes:
    digest = hashlib.md5(passphrase.encode("utf-8")).hexdigest()
    return digest.encode("ascii")


def encrypt(plaintext: bytes, passphrase: str, entropy=None) -> bytes:
    entropy = entropy or _entropy.default
    nonce = entropy.bytes(NONCE_SIZE)
    return nonce + AESGCM(derive_key(passphrase)).encrypt(
        nonce, plaintext, None
    )


def decrypt(ciphertext: bytes, passphrase: str) -> bytes:
    """Open a blob produced by `encrypt`.

    Raises `CorruptDataError` if the blob is too short to hold a nonce and
    a tag and `AuthenticationError` if the tag does not verify, which means
    either the passphrase is wrong or the blob was tampered with.
    """
    if len(ciphertext) < NONCE_SIZE + TAG_SIZE:
        raise CorruptDataError.from_context(
            "ciphertext truncated ({} bytes)".format(len(ciphertext))
        )
    nonce, sealed = ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:]
    try:
        return AESGCM(derive_key(passphrase)).decrypt(nonce, sealed, None)
    except InvalidTag:
        raise AuthenticationError.from_context(
            "message authentication failed"
        )


def verify_checksum(decrypted: bytes, expected: bytes):
    if not hmac.compare_digest(decrypted, expected):
        raise AuthenticationError.from_context("incorrect passphrase")
