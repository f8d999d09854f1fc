"""Sources of random bytes for nonces and service tokens."""

import binascii
import os
import random


class SystemEntropy(object):
    """Random bytes from the operating system's entropy source."""

    def bytes(self, n: int) -> bytes:
        return os.urandom(n)


class SeededEntropy(object):
    """Deterministic byte stream, for tests only.

    Never use this for real stores: anyone knowing the seed can predict
    every nonce and token.
    """

    def __init__(self, seed=0):
        self._random = random.Random(seed)

    def bytes(self, n: int) -> bytes:
        return self._random.randbytes(n)


default = SystemEntropy()


def token_hex(n: int, entropy=None) -> str:
    """Return `n` random bytes as a hex string of `2n` characters."""
    entropy = entropy or default
    return binascii.hexlify(entropy.bytes(n)).decode("ascii")
