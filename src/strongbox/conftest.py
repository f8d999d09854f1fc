import os

import pytest

from strongbox.entropy import SeededEntropy
from strongbox.repository import StoreFile


@pytest.fixture(autouse=True)
def ensure_workingdir(request):
    working_dir = os.getcwd()
    yield
    os.chdir(working_dir)


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    monkeypatch.delenv("STRONGBOX_PASSPHRASE", raising=False)
    monkeypatch.delenv("STRONGBOX_SECRETS_FILE", raising=False)


@pytest.fixture(autouse=True)
def output(monkeypatch):
    from strongbox import output
    from strongbox._output import TestBackend

    backend = TestBackend()
    monkeypatch.setattr(output, "backend", backend)
    monkeypatch.setattr(output, "enable_debug", False)
    return output


@pytest.fixture
def secrets_file(tmp_path):
    return tmp_path / "secrets.json"


@pytest.fixture
def store_file(secrets_file):
    return StoreFile(secrets_file, entropy=SeededEntropy(42))
