import pytest

from gitodb.errors import (
    GitObjectError,
    NoSuchObject,
    UnexpectedObjectType,
    is_no_such_object,
)
from gitodb.object_type import ObjectType

SHA = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"


def test_unexpected_object_type_formatting():
    err = UnexpectedObjectType(got=ObjectType.TREE, wanted=ObjectType.BLOB)
    assert str(err) == 'gitodb: unexpected object type, got: "tree", wanted: "blob"'
    assert err.got is ObjectType.TREE
    assert err.wanted is ObjectType.BLOB


def test_unexpected_object_type_is_package_error():
    err = UnexpectedObjectType(ObjectType.COMMIT, ObjectType.TAG)
    assert isinstance(err, GitObjectError)
    assert str(err) == 'gitodb: unexpected object type, got: "commit", wanted: "tag"'
    assert err.got is ObjectType.COMMIT
    assert err.wanted is ObjectType.TAG


def test_no_such_object_formatting():
    err = NoSuchObject(bytes.fromhex(SHA))
    assert str(err) == "gitodb: no such object: " + SHA
    assert is_no_such_object(err) is True


def test_no_such_object_is_lookup_error():
    err = NoSuchObject(bytes.fromhex(SHA))
    assert isinstance(err, LookupError)
    assert str(err) == "gitodb: no such object: " + SHA
    assert is_no_such_object(err) is True


def test_no_such_object_equality_by_oid():
    assert NoSuchObject(bytes.fromhex(SHA)) == NoSuchObject(bytes.fromhex(SHA))
    assert not NoSuchObject(b"\x01") == NoSuchObject(b"\x02")


def test_is_no_such_object_handles_none():
    assert is_no_such_object(None) is False


def test_is_no_such_object_rejects_other_errors():
    assert is_no_such_object(ValueError("x")) is False
    assert is_no_such_object(UnexpectedObjectType(ObjectType.TREE, ObjectType.BLOB)) is False


@pytest.mark.parametrize(
    "got, wanted, text",
    [
        (ObjectType.BLOB, ObjectType.TREE, 'got: "blob", wanted: "tree"'),
        (ObjectType.TAG, ObjectType.COMMIT, 'got: "tag", wanted: "commit"'),
    ],
)
def test_unexpected_object_type_message_names_both_types(got, wanted, text):
    err = UnexpectedObjectType(got, wanted)
    assert str(err).endswith(text)