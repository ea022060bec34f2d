# FILE: voyage/routes/memories.py
"""
Memory endpoints

All routes are scoped to the authenticated owner.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends

from voyage.auth import get_current_owner
from voyage.config import get_settings
from voyage.exceptions import ValidationError
from voyage.models.memory import MemoryCreate, MemoryUpdate
from voyage.services.dates import annotate
from voyage.services.grouping import group_memories
from voyage.services.memory_store import MemoryStore, get_memory_store
from voyage.services.query_filter import build_filter

logger = logging.getLogger(__name__)
router = APIRouter()


def _int_param(name: str, value: Optional[str]) -> Optional[int]:
    """Parse an optional integer query parameter; blank means absent"""
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(
            "Validation failed",
            errors=[{"field": name, "msg": f"{name} must be an integer"}],
            kind="invalid-filter"
        )


@router.post("", status_code=201)
async def create_memory(
    request: MemoryCreate,
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Create a new memory"""
    memory = store.create(owner_id, request.model_dump())

    return {
        "message": "Memory created successfully",
        "memory": annotate(memory)
    }


@router.get("")
async def list_memories(
    search: Optional[str] = None,
    year: Optional[str] = None,
    month: Optional[str] = None,
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """List memories, flat and grouped by year/month"""
    flt = build_filter(
        owner_id,
        search=search,
        year=_int_param("year", year),
        month=_int_param("month", month),
        month_mode=get_settings().month_filter_mode
    )

    memories = [annotate(m) for m in store.find(flt)]

    return {
        "memories": memories,
        "groupedMemories": group_memories(memories)
    }


@router.get("/stats")
async def memory_stats(
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Memory count for the profile screen"""
    return {"count": store.count(owner_id)}


@router.get("/{memory_id}")
async def get_memory(
    memory_id: str,
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Fetch one memory"""
    return {"memory": annotate(store.get_one(owner_id, memory_id))}


@router.put("/{memory_id}")
async def update_memory(
    memory_id: str,
    request: MemoryUpdate,
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Update a memory"""
    memory = store.update_one(owner_id, memory_id, request.model_dump(exclude_unset=True))

    return {
        "message": "Memory updated successfully",
        "memory": annotate(memory)
    }


@router.delete("/{memory_id}")
async def delete_memory(
    memory_id: str,
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Delete a memory"""
    store.delete_one(owner_id, memory_id)

    return {"message": "Memory deleted successfully"}


@router.delete("")
async def delete_all_memories(
    owner_id: str = Depends(get_current_owner),
    store: MemoryStore = Depends(get_memory_store)
):
    """Delete all memories for the authenticated owner"""
    deleted = store.delete_all(owner_id)

    return {
        "message": "All memories deleted successfully",
        "deletedCount": deleted
    }
