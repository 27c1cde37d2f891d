"""
Memory lists stored inside a pin's notes column.

A pin's notes hold either free text or an ordered list of memories
(``{"type": "text"|"image", "content": str}``) serialized as JSON behind
MEMORIES_PREFIX. Anything reading notes must check the prefix first.
"""
import json
from typing import Any, Dict, Iterable, List, Optional

MEMORIES_PREFIX = "__MEMORIES__:"
MEMORY_TYPES = ("text", "image")


def _as_dict(memory: Any) -> Dict[str, str]:
    if hasattr(memory, "model_dump"):
        memory = memory.model_dump()
    memory_type = memory.get("type")
    if memory_type not in MEMORY_TYPES:
        raise ValueError(f"Unknown memory type: {memory_type!r}")
    return {"type": memory_type, "content": str(memory.get("content") or "")}


def encode_memories(memories: Iterable[Any]) -> str:
    """Serialize memories (dicts or Memory schemas) into a notes string, keeping order"""
    entries = [_as_dict(m) for m in memories]
    return MEMORIES_PREFIX + json.dumps(entries, ensure_ascii=False)


def is_memory_notes(notes: Optional[str]) -> bool:
    return bool(notes) and notes.startswith(MEMORIES_PREFIX)


def decode_notes(notes: Optional[str]) -> Optional[List[Dict[str, str]]]:
    """Memory list encoded in ``notes``, or None when notes are plain text"""
    if not is_memory_notes(notes):
        return None
    try:
        entries = json.loads(notes[len(MEMORIES_PREFIX):])
    except json.JSONDecodeError:
        return None
    if not isinstance(entries, list):
        return None
    return [
        {"type": e.get("type"), "content": e.get("content")}
        for e in entries
        if isinstance(e, dict)
    ]


def first_image(memories: Iterable[Any]) -> Optional[str]:
    """Content of the first image memory, if any"""
    for memory in memories:
        entry = _as_dict(memory)
        if entry["type"] == "image" and entry["content"]:
            return entry["content"]
    return None
