"""In-memory model of a secrets file."""

from typing import Callable, List, Optional

from strongbox import CorruptDataError


class Secret(object):

    def __init__(self, name: str, value: bytes, access: List[str] = None):
        self.name = name
        self.value = value
        self.access = list(access or [])

    def __repr__(self):
        return "<Secret {!r} access={!r}>".format(self.name, self.access)


class Service(object):

    def __init__(self, name: str, token: str):
        self.name = name
        self.token = token

    def __repr__(self):
        return "<Service {!r}>".format(self.name)


class Store(object):
    """All secrets and services of one secrets file.

    Values, tokens and the checksum are plaintext while the store is held
    in memory. `to_document` and `from_document` translate to and from the
    on-disk layout and apply `transform` to every encrypted field on the
    way, so encryption and decryption walk the same fields in the same
    order.
    """

    def __init__(
        self,
        secrets: List[Secret] = None,
        services: List[Service] = None,
        checksum: bytes = b"",
    ):
        self.secrets = list(secrets or [])
        self.services = list(services or [])
        self.checksum = checksum

    def index_of_secret(self, name: str) -> int:
        for i, secret in enumerate(self.secrets):
            if secret.name == name:
                return i
        return -1

    def find_secret(self, name: str) -> Optional[Secret]:
        i = self.index_of_secret(name)
        return self.secrets[i] if i != -1 else None

    def find_service(self, name: str) -> Optional[Service]:
        for service in self.services:
            if service.name == name:
                return service
        return None

    def has_service(self, name: str) -> bool:
        return self.find_service(name) is not None

    def to_document(self, transform: Callable[[bytes, str], bytes]) -> dict:
        return {
            "Secrets": [
                {
                    "Name": secret.name,
                    "Secret": transform(
                        secret.value, "secret {}".format(secret.name)
                    ),
                    "Access": list(secret.access),
                }
                for secret in self.secrets
            ],
            "Checksum": transform(self.checksum, "checksum"),
            "Services": [
                {
                    "Name": service.name,
                    "Secret": transform(
                        service.token.encode("ascii"),
                        "service {}".format(service.name),
                    ),
                }
                for service in self.services
            ],
        }

    @classmethod
    def from_document(
        cls, document: dict, transform: Callable[[bytes, str], bytes]
    ) -> "Store":
        if not isinstance(document, dict):
            raise CorruptDataError.from_context(
                "expected an object at the top level"
            )
        try:
            # The checksum goes first: a wrong passphrase must be reported
            # as such and not as a failure on some secret.
            checksum = transform(document["Checksum"], "checksum")
            secrets = [
                Secret(
                    item["Name"],
                    transform(
                        item["Secret"], "secret {}".format(item["Name"])
                    ),
                    _access_list(item),
                )
                for item in document.get("Secrets") or []
            ]
            services = [
                Service(
                    item["Name"],
                    transform(
                        item["Secret"], "service {}".format(item["Name"])
                    ).decode("ascii"),
                )
                for item in document.get("Services") or []
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise CorruptDataError.from_context(
                "malformed document: {}".format(e)
            )
        except UnicodeDecodeError:
            raise CorruptDataError.from_context("service token is not ASCII")
        return cls(secrets, services, checksum)


def _access_list(item: dict) -> List[str]:
    access = item.get("Access") or []
    if not isinstance(access, list):
        raise CorruptDataError.from_context(
            "access of secret {} is not a list".format(item["Name"])
        )
    return access
