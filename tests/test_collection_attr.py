import pytest

from milvus_entity.collection_attr import (
    AUTO_COMPACTION_KEY,
    TTL_KEY,
    AutoCompactionCollectionAttribute,
    TTLCollectionAttribute,
    collection_auto_compaction_enabled,
    collection_ttl,
)


@pytest.mark.parametrize("text,expected", [("1000", 1000), ("0", 0), ("+5", 5)])
def test_ttl_valid(text, expected):
    assert TTLCollectionAttribute(text).validate() == expected


@pytest.mark.parametrize("text", ["a", "-10", " 5", "1_000", "", "99999999999999999999"])
def test_ttl_invalid(text):
    with pytest.raises(ValueError):
        TTLCollectionAttribute(text).validate()


@pytest.mark.parametrize("ttl", [1000, 0])
def test_collection_ttl(ttl):
    ca = collection_ttl(ttl)
    assert ca.key_value() == (TTL_KEY, str(ttl))
    assert ca.validate() == ttl


def test_collection_ttl_negative():
    ca = collection_ttl(-10)
    assert ca.key_value() == (TTL_KEY, "-10")
    with pytest.raises(ValueError, match="positive"):
        ca.validate()


@pytest.mark.parametrize("text,expected", [("true", True), ("false", False)])
def test_auto_compaction_valid(text, expected):
    assert AutoCompactionCollectionAttribute(text).validate() is expected


@pytest.mark.parametrize("text", ["a", ""])
def test_auto_compaction_invalid(text):
    with pytest.raises(ValueError):
        AutoCompactionCollectionAttribute(text).validate()


@pytest.mark.parametrize("enabled,text", [(True, "true"), (False, "false")])
def test_collection_auto_compaction_enabled(enabled, text):
    ca = collection_auto_compaction_enabled(enabled)
    assert ca.key_value() == (AUTO_COMPACTION_KEY, text)
    assert ca.validate() is enabled