"""Tests for the media type table constants."""

from safefs.core.constants import (
    EXTENSION_TYPES,
    MIME_TYPES,
    TEMP_NAME_ATTEMPTS,
    TEMP_NAME_PREFIX,
)


def test_extensions_are_unique_per_type() -> None:
    """Test that no media type lists the same extension twice."""
    for mime, extensions in MIME_TYPES.items():
        assert len(extensions) == len(set(extensions)), mime


def test_reverse_table_covers_every_extension() -> None:
    """Test that every declared extension maps back to a media type."""
    for extensions in MIME_TYPES.values():
        for extension in extensions:
            assert extension in EXTENSION_TYPES


def test_synonyms_map_to_the_same_type() -> None:
    """Test that synonym extensions resolve to one canonical type."""
    assert EXTENSION_TYPES["jpg"] == EXTENSION_TYPES["jpeg"] == "image/jpeg"
    assert EXTENSION_TYPES["htm"] == EXTENSION_TYPES["html"] == "text/html"


def test_temp_name_settings() -> None:
    """Test the hidden sibling prefix and retry count."""
    assert TEMP_NAME_PREFIX == ".!"
    assert TEMP_NAME_ATTEMPTS == 10
