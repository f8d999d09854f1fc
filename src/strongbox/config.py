"""Locate the secrets file and the passphrase.

Settings are looked up in this order, later sources winning:

* built-in defaults,
* the ``[strongbox]`` section of ``strongbox.cfg`` in the working directory,
* the ``STRONGBOX_SECRETS_FILE`` and ``STRONGBOX_PASSPHRASE`` environment
  variables,
* command line arguments.

The passphrase is deliberately not read from the configuration file.
"""

import configparser
import os
import pathlib

from configupdater import ConfigUpdater

from strongbox import ArgumentError, CorruptDataError, output

CONFIG_FILE = "strongbox.cfg"
DEFAULT_SECRETS_FILE = "secrets.json"


class Settings(object):

    def __init__(self, secrets_file=DEFAULT_SECRETS_FILE, passphrase=None):
        self.secrets_file = secrets_file
        self.passphrase = passphrase

    @classmethod
    def load(cls, basedir=".", secrets_file=None, passphrase=None):
        self = cls()
        self._read_config(pathlib.Path(basedir) / CONFIG_FILE)
        self._read_environ()
        if secrets_file is not None:
            self.secrets_file = secrets_file
        if passphrase is not None:
            self.passphrase = passphrase
        return self

    def _read_config(self, path):
        if not path.exists():
            return
        output.annotate("Reading {}".format(path), debug=True)
        try:
            config = ConfigUpdater().read(str(path))
        except configparser.Error as e:
            raise CorruptDataError.from_context(str(e), path)
        if not config.has_option("strongbox", "secrets_file"):
            return
        option = config.get("strongbox", "secrets_file")
        if option.value:
            self.secrets_file = option.value.strip()

    def _read_environ(self):
        if os.environ.get("STRONGBOX_SECRETS_FILE"):
            self.secrets_file = os.environ["STRONGBOX_SECRETS_FILE"]
        if os.environ.get("STRONGBOX_PASSPHRASE"):
            self.passphrase = os.environ["STRONGBOX_PASSPHRASE"]

    def validate(self):
        """Check the preconditions every command has before file access."""
        if not (self.passphrase or "").strip():
            raise ArgumentError.from_context("--passphrase")
        if not (self.secrets_file or "").strip():
            raise ArgumentError.from_context("--secrets-file")
        self.passphrase = self.passphrase.strip()
        self.secrets_file = self.secrets_file.strip()
