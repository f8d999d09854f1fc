import os
import textwrap

import mock
import pytest

from strongbox import ArgumentError, CorruptDataError
from strongbox.config import DEFAULT_SECRETS_FILE, Settings


def test_defaults(tmp_path):
    settings = Settings.load(basedir=tmp_path)
    assert DEFAULT_SECRETS_FILE == settings.secrets_file
    assert settings.passphrase is None


def test_config_file(tmp_path):
    (tmp_path / "strongbox.cfg").write_text(
        textwrap.dedent(
            """\
            [strongbox]
            secrets_file = environments/prod/secrets.json
            passphrase = ignored
            """
        )
    )
    settings = Settings.load(basedir=tmp_path)
    assert "environments/prod/secrets.json" == settings.secrets_file
    assert settings.passphrase is None


def test_config_file_without_section(tmp_path):
    (tmp_path / "strongbox.cfg").write_text("[other]\nkey = value\n")
    assert DEFAULT_SECRETS_FILE == Settings.load(basedir=tmp_path).secrets_file


def test_broken_config_file(tmp_path):
    (tmp_path / "strongbox.cfg").write_text("no section header\n")
    with pytest.raises(CorruptDataError):
        Settings.load(basedir=tmp_path)


def test_environment_overrides_config_file(tmp_path):
    (tmp_path / "strongbox.cfg").write_text(
        "[strongbox]\nsecrets_file = from-config.json\n"
    )
    with mock.patch.dict(
        os.environ,
        {
            "STRONGBOX_SECRETS_FILE": "from-env.json",
            "STRONGBOX_PASSPHRASE": "env-passphrase",
        },
    ):
        settings = Settings.load(basedir=tmp_path)
    assert "from-env.json" == settings.secrets_file
    assert "env-passphrase" == settings.passphrase


def test_arguments_override_environment(tmp_path, monkeypatch):
    monkeypatch.setitem(os.environ, "STRONGBOX_SECRETS_FILE", "from-env.json")
    monkeypatch.setitem(os.environ, "STRONGBOX_PASSPHRASE", "env-passphrase")
    settings = Settings.load(
        basedir=tmp_path, secrets_file="arg.json", passphrase="arg"
    )
    assert "arg.json" == settings.secrets_file
    assert "arg" == settings.passphrase


def test_validate_strips_whitespace():
    settings = Settings(secrets_file=" secrets.json ", passphrase=" p\n")
    settings.validate()
    assert "secrets.json" == settings.secrets_file
    assert "p" == settings.passphrase


@pytest.mark.parametrize(
    "secrets_file, passphrase, argument",
    [
        ("secrets.json", None, "--passphrase"),
        ("secrets.json", "  ", "--passphrase"),
        ("", "p", "--secrets-file"),
        (None, "p", "--secrets-file"),
    ],
)
def test_validate_rejects_missing_settings(secrets_file, passphrase, argument):
    settings = Settings(secrets_file=secrets_file, passphrase=passphrase)
    with pytest.raises(ArgumentError) as e:
        settings.validate()
    assert argument == e.value.argument
