"""Repo de la colección `note`."""
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ReturnDocument

from app.core.time import now_iso
from app.infrastructure.db.mongo import get_db, to_object_id

COLLECTION = "note"


def insert_note(doc: Dict[str, Any]) -> str:
    """Inserta nota con defaults y devuelve id (str)."""
    data = dict(doc)
    now = now_iso()
    data.setdefault("tags", [])
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = get_db()[COLLECTION].insert_one(data)
    return str(res.inserted_id)


def get_note_by_id(note_id: Any) -> Optional[Dict[str, Any]]:
    oid = to_object_id(note_id)
    if oid is None:
        return None
    return get_db()[COLLECTION].find_one({"_id": oid})


def list_notes(tag: Optional[str] = None) -> List[Dict[str, Any]]:
    """Lista notas; con `tag`, solo las que lo contienen (tags ya en minúsculas)."""
    filtro: Dict[str, Any] = {}
    if tag:
        filtro["tags"] = str(tag).lower()
    return list(get_db()[COLLECTION].find(filtro))


def list_notes_by_ids(note_ids: Iterable[Any]) -> List[Dict[str, Any]]:
    """Notas cuyo id está en `note_ids`, en el mismo orden; ids colgantes se omiten."""
    oids = [oid for oid in (to_object_id(n) for n in note_ids) if oid is not None]
    if not oids:
        return []
    by_id = {d["_id"]: d for d in get_db()[COLLECTION].find({"_id": {"$in": oids}})}
    return [by_id[oid] for oid in oids if oid in by_id]


def update_note(note_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Aplica `$set` parcial y devuelve el documento actualizado (None si no existe)."""
    oid = to_object_id(note_id)
    if oid is None:
        return None
    set_ops = dict(fields)
    set_ops["updated_at"] = now_iso()
    return get_db()[COLLECTION].find_one_and_update(
        {"_id": oid},
        {"$set": set_ops},
        return_document=ReturnDocument.AFTER,
    )


def delete_note(note_id: Any) -> Optional[Dict[str, Any]]:
    """Borra la nota y devuelve el documento eliminado (None si no existía)."""
    oid = to_object_id(note_id)
    if oid is None:
        return None
    return get_db()[COLLECTION].find_one_and_delete({"_id": oid})
