"""Reading and writing encrypted secrets files.

A secrets file is a JSON document::

    {
        "Secrets": [{"Name": "...", "Secret": "<base64>", "Access": [...]}],
        "Checksum": "<base64>",
        "Services": [{"Name": "...", "Secret": "<base64>"}]
    }

Names and access lists are plaintext so changes stay reviewable in a diff.
Every `Secret` and the `Checksum` field hold base64 encoded blobs as
produced by `strongbox.crypto.encrypt`.

The file is rewritten in place on every save. There is no locking and no
atomic replace: concurrent writers overwrite each other and a crash during
a write may leave a damaged file behind.
"""

import base64
import binascii
import json
import pathlib

from strongbox import (
    AuthenticationError,
    CorruptDataError,
    StoreIOError,
    output,
)

from . import crypto
from .store import Store


class StoreFile(object):

    def __init__(self, path, entropy=None):
        self.path = pathlib.Path(path)
        self.entropy = entropy

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def load_or_create(self, passphrase: str) -> Store:
        if not self.exists:
            output.annotate(
                "Creating new secrets file {}".format(self.path), debug=True
            )
            self.save(Store(checksum=crypto.CHECKSUM_PHRASE), passphrase)
        return self.load(passphrase)

    def load(self, passphrase: str) -> Store:
        output.annotate("Loading {}".format(self.path), debug=True)
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StoreIOError.from_context(self.path, e)
        try:
            document = json.loads(raw)
        except ValueError as e:
            raise CorruptDataError.from_context(
                "not a valid secrets file: {}".format(e), self.path
            )

        def decrypt(blob, field):
            try:
                data = base64.b64decode(blob, validate=True)
            except (binascii.Error, ValueError):
                raise CorruptDataError.from_context(
                    "{} is not valid base64".format(field), self.path
                )
            try:
                return crypto.decrypt(data, passphrase)
            except AuthenticationError as e:
                if field == "checksum":
                    raise AuthenticationError.from_context(
                        "incorrect passphrase: {}".format(e.message)
                    )
                e.field = field
                raise
            except CorruptDataError as e:
                e.message = "{}: {}".format(field, e.message)
                e.path = str(self.path)
                raise

        try:
            store = Store.from_document(document, decrypt)
        except CorruptDataError as e:
            if e.path is None:
                e.path = str(self.path)
            raise
        crypto.verify_checksum(store.checksum, crypto.CHECKSUM_PHRASE)
        output.annotate(
            "Loaded {} secrets and {} services".format(
                len(store.secrets), len(store.services)
            ),
            debug=True,
        )
        return store

    def save(self, store: Store, passphrase: str):
        def encrypt(data, field):
            ciphertext = crypto.encrypt(data, passphrase, self.entropy)
            return base64.b64encode(ciphertext).decode("ascii")

        document = store.to_document(encrypt)
        content = json.dumps(document, indent=4)
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StoreIOError.from_context(self.path, e)
        output.annotate("Wrote {}".format(self.path), debug=True)


def load_or_create(path, passphrase: str, entropy=None) -> Store:
    return StoreFile(path, entropy).load_or_create(passphrase)
