"""Secret and service access management on a loaded store.

A service is granted access to secrets by name and receives a bearer token
on its first grant. The token stays the same for as long as the service
exists: further grants return it again, and removing access to individual
secrets keeps it. Only revoking the service as a whole deletes it.
"""

from typing import List, Tuple

from strongbox import ArgumentError, NotFoundError, output

from . import entropy as _entropy
from .store import Secret, Service, Store

TOKEN_BYTES = 50


def _require(value, argument):
    if not value:
        raise ArgumentError.from_context(argument)


class AccessController(object):

    def __init__(self, store: Store, entropy=None):
        self.store = store
        self.entropy = entropy or _entropy.default

    # Secrets

    def set(self, name: str, value: bytes) -> bool:
        """Store `value` under `name`.

        Returns True if a new secret was added, False if an existing one
        was replaced. Replacing keeps the secret's access list.
        """
        _require(name, "secret name")
        _require(value, "secret value")
        existing = self.store.find_secret(name)
        if existing is None:
            self.store.secrets.append(Secret(name, value))
            return True
        existing.value = value
        return False

    def get(self, name: str) -> bytes:
        _require(name, "secret name")
        secret = self.store.find_secret(name)
        if secret is None:
            raise NotFoundError.from_context("secret", name)
        return secret.value

    def list(self) -> List[Tuple[str, str, List[str]]]:
        """Name, a masked hint of the value and the access list per secret."""
        result = []
        for secret in self.store.secrets:
            hint = "****" + secret.value[-4:].decode("utf-8", "replace")
            result.append((secret.name, hint, list(secret.access)))
        return result

    def remove(self, name: str) -> bool:
        """Remove a secret. Removing an unknown secret is not an error."""
        _require(name, "secret name")
        i = self.store.index_of_secret(name)
        if i == -1:
            return False
        del self.store.secrets[i]
        return True

    # Services

    def add_access(self, service_name: str, secret_names: List[str]) -> str:
        """Grant `service_name` access to all `secret_names`.

        Either every secret is granted or, if any name is unknown, none is.
        Returns the service's token, creating the service on its first
        grant.
        """
        _require(service_name, "service name")
        _require(secret_names, "secret names")
        secrets = []
        for name in secret_names:
            secret = self.store.find_secret(name)
            if secret is None:
                raise NotFoundError.from_context("secret", name)
            secrets.append(secret)

        service = self.store.find_service(service_name)
        if service is None:
            service = Service(
                service_name, _entropy.token_hex(TOKEN_BYTES, self.entropy)
            )
            self.store.services.append(service)
            output.annotate(
                "Created service {}".format(service_name), debug=True
            )
        for secret in secrets:
            if service_name not in secret.access:
                secret.access.append(service_name)
        return service.token

    def get_access_token(self, service_name: str) -> str:
        _require(service_name, "service name")
        service = self.store.find_service(service_name)
        if service is None:
            raise NotFoundError.from_context("service", service_name)
        return service.token

    def remove_access(self, service_name: str, secret_names: List[str]):
        """Take away access to some secrets. The service and its token stay."""
        _require(service_name, "service name")
        _require(secret_names, "secret names")
        if not self.store.has_service(service_name):
            return
        for name in secret_names:
            secret = self.store.find_secret(name)
            if secret is None:
                continue
            secret.access = [a for a in secret.access if a != service_name]

    def revoke_service(self, service_name: str) -> bool:
        """Delete a service and all of its grants.

        Returns False if the service did not exist.
        """
        _require(service_name, "service name")
        if not self.store.has_service(service_name):
            return False
        for secret in self.store.secrets:
            secret.access = [a for a in secret.access if a != service_name]
        self.store.services = [
            s for s in self.store.services if s.name != service_name
        ]
        return True

    # Passphrase

    def change_passphrase(self, store_file, new_passphrase: str):
        """Write the store under `new_passphrase`.

        The store is already decrypted in memory, so the old passphrase is
        not needed. Once written, only `new_passphrase` opens the file.
        """
        _require(new_passphrase, "new passphrase")
        store_file.save(self.store, new_passphrase)
