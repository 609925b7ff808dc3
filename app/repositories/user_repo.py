"""
Repositorio para la colección `user`.
"""
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError
from app.core.time import now_iso
from app.infrastructure.db.mongo import get_db, to_object_id

COLLECTION = "user"

# Nunca exponer el hash del password
PUBLIC_PROJECTION = {"password_hash": 0}
SUMMARY_PROJECTION = {"username": 1, "email": 1}


def insert_user(doc: Dict[str, Any]) -> str:
    """
    Inserta un usuario y retorna el string del inserted_id.
    - Normaliza `email` a minúsculas.
    - Arranca con `notes` vacío.
    - Sella `created_at` y `updated_at` en ISO-8601 UTC.
    """
    data = dict(doc)
    if data.get("email"):
        data["email"] = str(data["email"]).lower()
    data.setdefault("notes", [])
    now = now_iso()
    data.setdefault("created_at", now)
    data["updated_at"] = now
    try:
        res = get_db()[COLLECTION].insert_one(data)
    except DuplicateKeyError as e:
        # Carrera contra el índice único (username/email)
        raise ConflictError("User with this email or username already exists") from e
    return str(res.inserted_id)


def get_user_by_id(user_id: Any, projection: Optional[Dict[str, int]] = None) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str u ObjectId); None si no existe o el id es inválido."""
    oid = to_object_id(user_id)
    if oid is None:
        return None
    return get_db()[COLLECTION].find_one({"_id": oid}, projection or PUBLIC_PROJECTION)


def find_user_by_email_or_username(email: str, username: str) -> Optional[Dict[str, Any]]:
    """Busca un usuario que ya use ese email o ese username."""
    return get_db()[COLLECTION].find_one(
        {"$or": [{"email": str(email).lower()}, {"username": username}]},
        PUBLIC_PROJECTION,
    )


def list_users() -> List[Dict[str, Any]]:
    """Lista usuarios excluyendo campos sensibles."""
    return list(get_db()[COLLECTION].find({}, PUBLIC_PROJECTION))


def add_note_ref(user_id: ObjectId, note_id: ObjectId) -> None:
    """Agrega el id de la nota al final de `notes` del autor."""
    get_db()[COLLECTION].update_one(
        {"_id": user_id},
        {"$push": {"notes": note_id}, "$set": {"updated_at": now_iso()}},
    )


def remove_note_ref(user_id: ObjectId, note_id: ObjectId) -> None:
    """Quita el id de la nota de `notes` del autor."""
    get_db()[COLLECTION].update_one(
        {"_id": user_id},
        {"$pull": {"notes": note_id}, "$set": {"updated_at": now_iso()}},
    )
