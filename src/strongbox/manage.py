"""Commands operating on a secrets file.

Each command loads the file, applies one change and writes it back. Nothing
is written if the command fails.
"""

from typing import List, Optional, Union

from strongbox import ArgumentError, CorruptDataError, output
from strongbox.access import AccessController
from strongbox.config import Settings
from strongbox.repository import StoreFile


def split_names(names: Union[str, List[str], None]) -> List[str]:
    """Turn a comma separated list of secret names into a list."""
    if not names:
        return []
    if isinstance(names, str):
        names = names.split(",")
    return [n.strip() for n in names if n.strip()]


def _required(value: Optional[str], argument: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ArgumentError.from_context(argument)
    return value


def _open(secrets_file, passphrase):
    settings = Settings.load(secrets_file=secrets_file, passphrase=passphrase)
    settings.validate()
    store_file = StoreFile(settings.secrets_file)
    store = store_file.load_or_create(settings.passphrase)
    return settings, store_file, AccessController(store)


def _save(settings, store_file, controller):
    store_file.save(controller.store, settings.passphrase)


def set_secret(name, value, secrets_file=None, passphrase=None, **kw):
    """Add a secret or replace its value, keeping its access list."""
    name = _required(name, "secret name")
    value = _required(value, "secret value")
    settings, store_file, controller = _open(secrets_file, passphrase)
    added = controller.set(name, value.encode("utf-8"))
    _save(settings, store_file, controller)
    output.line("added secret" if added else "replaced secret", green=True)
    return added


def get_secret(name, secrets_file=None, passphrase=None, **kw):
    name = _required(name, "secret name")
    settings, _, controller = _open(secrets_file, passphrase)
    try:
        value = controller.get(name).decode("utf-8")
    except UnicodeDecodeError:
        raise CorruptDataError.from_context(
            "secret {} is not valid UTF-8".format(name), settings.secrets_file
        )
    output.line(value)
    return value


def list_secrets(secrets_file=None, passphrase=None, **kw):
    """Show all secrets with a masked value and their access list.

    A missing secrets file is reported as empty and not created.
    """
    settings = Settings.load(secrets_file=secrets_file, passphrase=passphrase)
    settings.validate()
    store_file = StoreFile(settings.secrets_file)
    if not store_file.exists:
        output.line("empty")
        return []
    controller = AccessController(
        store_file.load_or_create(settings.passphrase)
    )
    entries = controller.list()
    if not entries:
        output.line("empty")
    for name, hint, access in entries:
        output.line(
            "{}: {} accessible by [{}]".format(name, hint, ",".join(access))
        )
    return entries


def remove_secret(name, secrets_file=None, passphrase=None, **kw):
    name = _required(name, "secret name")
    settings, store_file, controller = _open(secrets_file, passphrase)
    if not controller.remove(name):
        output.line("not found", red=True)
        return False
    _save(settings, store_file, controller)
    output.line("removed", green=True)
    return True


def add_access(
    service_name, secrets, secrets_file=None, passphrase=None, **kw
):
    """Grant a service access to secrets and show its token."""
    service_name = _required(service_name, "service name")
    names = split_names(secrets)
    if not names:
        raise ArgumentError.from_context("secrets", "must specify secrets")
    settings, store_file, controller = _open(secrets_file, passphrase)
    token = controller.add_access(service_name, names)
    _save(settings, store_file, controller)
    output.line(
        "added access to {} for {}".format(", ".join(names), service_name),
        green=True,
    )
    output.line("Please use this token to access the secrets:")
    output.line(token, yellow=True)
    return token


def get_access_token(service_name, secrets_file=None, passphrase=None, **kw):
    service_name = _required(service_name, "service name")
    _, _, controller = _open(secrets_file, passphrase)
    token = controller.get_access_token(service_name)
    output.line(token)
    return token


def remove_access(
    service_name, secrets, secrets_file=None, passphrase=None, **kw
):
    """Take away access to some secrets, keeping the service's token."""
    service_name = _required(service_name, "service name")
    names = split_names(secrets)
    if not names:
        raise ArgumentError.from_context("secrets", "must specify secrets")
    settings, store_file, controller = _open(secrets_file, passphrase)
    controller.remove_access(service_name, names)
    _save(settings, store_file, controller)
    output.line("removed", green=True)


def revoke_service(service_name, secrets_file=None, passphrase=None, **kw):
    """Delete a service together with all of its grants."""
    service_name = _required(service_name, "service name")
    settings, store_file, controller = _open(secrets_file, passphrase)
    if controller.revoke_service(service_name):
        _save(settings, store_file, controller)
    output.line("revoked", green=True)


def change_passphrase(
    new_passphrase, secrets_file=None, passphrase=None, **kw
):
    new_passphrase = _required(new_passphrase, "new passphrase")
    _, store_file, controller = _open(secrets_file, passphrase)
    controller.change_passphrase(store_file, new_passphrase)
    output.line("changed passphrase", green=True)
