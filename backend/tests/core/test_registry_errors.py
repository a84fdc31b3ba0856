"""Error Hierarchy — tests for codes, statuses, and the REST envelope."""

from namebind.core.domain_types import AssetSlot
from namebind.core.errors import (
    ErrorCategory,
    IdentifierTakenError,
    RegistryError,
    ResourceNotFoundError,
    SlugExistsError,
    StoreError,
    UniqueViolationError,
)


def test_taken_error_is_conflict():
    err = IdentifierTakenError("alice")
    assert err.http_status == 409
    assert err.code == "USERNAME_TAKEN"
    assert err.category is ErrorCategory.CONFLICT


def test_slug_exists_carries_identifier():
    body = SlugExistsError("mytopic").to_response()
    assert body["error"]["code"] == "SLUG_EXISTS"
    assert body["error"]["context"]["identifier"] == "mytopic"


def test_not_found_message():
    err = ResourceNotFoundError("Topic", "t-1")
    assert err.http_status == 404
    assert err.message == "Topic 't-1' not found"


def test_store_error_is_500_and_not_unique():
    err = StoreError("boom", "update", "topics")
    assert err.http_status == 500
    assert err.unique_violation is False
    assert "update on topics" in err.message


def test_unique_violation_is_store_error():
    err = UniqueViolationError("username_bindings")
    assert isinstance(err, StoreError)
    assert isinstance(err, RegistryError)
    assert err.unique_violation is True
    assert err.code == "UNIQUE_VIOLATION"


def test_to_response_envelope_shape():
    body = IdentifierTakenError("alice").to_response()["error"]
    assert set(body) == {"code", "message", "category", "severity", "timestamp", "context"}
    assert body["category"] == "conflict"


def test_asset_slot_pointer_fields():
    assert AssetSlot.ICON.pointer_field == "image"
    assert AssetSlot.BANNER.pointer_field == "banner"
