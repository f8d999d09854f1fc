import pytest

from strongbox import CorruptDataError
from strongbox.store import Secret, Service, Store


@pytest.fixture
def store():
    return Store(
        secrets=[
            Secret("a", b"1", ["svc"]),
            Secret("b", b"2"),
        ],
        services=[Service("svc", "ab" * 50)],
        checksum=b"checksum",
    )


def identity(data, field):
    return data


def test_lookups(store):
    assert 1 == store.index_of_secret("b")
    assert -1 == store.index_of_secret("B")
    assert store.find_secret("a").value == b"1"
    assert store.find_secret("missing") is None
    assert store.has_service("svc")
    assert not store.has_service("other")
    assert store.find_service("svc").token == "ab" * 50


def test_secret_copies_access_list():
    access = ["svc"]
    secret = Secret("a", b"1", access)
    secret.access.append("other")
    assert ["svc"] == access


def test_document_layout(store):
    document = store.to_document(identity)
    assert ["Secrets", "Checksum", "Services"] == list(document)
    assert {"Name": "a", "Secret": b"1", "Access": ["svc"]} == (
        document["Secrets"][0]
    )
    assert {"Name": "svc", "Secret": b"ab" * 50} == document["Services"][0]
    assert b"checksum" == document["Checksum"]


def test_document_roundtrip(store):
    loaded = Store.from_document(store.to_document(identity), identity)
    assert ["a", "b"] == [s.name for s in loaded.secrets]
    assert [["svc"], []] == [s.access for s in loaded.secrets]
    assert "ab" * 50 == loaded.services[0].token
    assert b"checksum" == loaded.checksum


def test_transform_sees_every_encrypted_field_checksum_first(store):
    seen = []

    def record(data, field):
        seen.append(field)
        return data

    Store.from_document(store.to_document(identity), record)
    assert ["checksum", "secret a", "secret b", "service svc"] == seen


def test_null_lists_are_empty():
    document = {
        "Secrets": [{"Name": "a", "Secret": b"1", "Access": None}],
        "Checksum": b"c",
        "Services": None,
    }
    store = Store.from_document(document, identity)
    assert [] == store.secrets[0].access
    assert [] == store.services


@pytest.mark.parametrize(
    "document",
    [
        [],
        {},
        {"Checksum": b"c", "Secrets": [{"Secret": b"1"}]},
        {"Checksum": b"c", "Services": [{"Name": "svc"}]},
        {"Checksum": b"c", "Secrets": "nope"},
        {
            "Checksum": b"c",
            "Secrets": [{"Name": "a", "Secret": b"1", "Access": "svc"}],
        },
    ],
)
def test_malformed_documents(document):
    with pytest.raises(CorruptDataError):
        Store.from_document(document, identity)
