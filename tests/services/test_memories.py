"""Tests for the memory list stored in pin notes."""

from __future__ import annotations

import json

import pytest

from pinmap.schemas.pin import Memory
from pinmap.services.memories import (
    MEMORIES_PREFIX,
    decode_notes,
    encode_memories,
    first_image,
    is_memory_notes,
)


def test_encode_uses_prefix_and_keeps_order():
    notes = encode_memories([
        {"type": "text", "content": "yum"},
        {"type": "image", "content": "data:image/png;base64,AAA"},
        {"type": "text", "content": "again"},
    ])

    assert notes.startswith(MEMORIES_PREFIX)
    payload = json.loads(notes[len(MEMORIES_PREFIX):])
    assert [m["content"] for m in payload] == ["yum", "data:image/png;base64,AAA", "again"]
    assert decode_notes(notes) == payload


def test_encode_accepts_schema_objects():
    notes = encode_memories([Memory(type="text", content="ünïcode")])

    assert decode_notes(notes) == [{"type": "text", "content": "ünïcode"}]
    assert "ünïcode" in notes


def test_plain_notes_are_not_decoded():
    assert decode_notes("Great coffee") is None
    assert decode_notes(None) is None
    assert not is_memory_notes("")


def test_corrupt_payload_reads_as_plain_text():
    assert decode_notes(MEMORIES_PREFIX + "{not json") is None


def test_unknown_memory_type_rejected():
    with pytest.raises(ValueError):
        encode_memories([{"type": "video", "content": "x"}])


def test_first_image():
    memories = [
        {"type": "text", "content": "hello"},
        {"type": "image", "content": "img-1"},
        {"type": "image", "content": "img-2"},
    ]

    assert first_image(memories) == "img-1"
    assert first_image([{"type": "text", "content": "only text"}]) is None
