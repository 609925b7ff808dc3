"""
Servicios para la entidad `user`.

Mantienen la lógica de negocio fuera de la capa API: unicidad de
username/email, hashing del password y resolución de `notes`.
"""
import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from app.repositories import note_repo, user_repo
from app.services.password_service import hash_password

_log = logging.getLogger("notegraph.services.user")


def note_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Forma pública de una nota con la referencia al autor como `author_id`."""
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title", ""),
        "content": doc.get("content", ""),
        "author_id": str(doc.get("author", "")),
        "tags": list(doc.get("tags") or []),
        "created_at": doc.get("created_at", ""),
        "updated_at": doc.get("updated_at", ""),
    }


def user_out(doc: Dict[str, Any], notes: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Forma pública de un usuario (sin password_hash)."""
    out = {
        "id": str(doc["_id"]),
        "username": doc.get("username", ""),
        "email": doc.get("email", ""),
        "note_ids": [str(n) for n in doc.get("notes") or []],
        "created_at": doc.get("created_at", ""),
        "updated_at": doc.get("updated_at", ""),
    }
    if notes is not None:
        out["notes"] = notes
    return out


def user_summary(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Proyección reducida del autor (username, email)."""
    return {"id": str(doc["_id"]), "username": doc.get("username", ""), "email": doc.get("email", "")}


def _with_notes(doc: Dict[str, Any]) -> Dict[str, Any]:
    notes = [note_out(n) for n in note_repo.list_notes_by_ids(doc.get("notes") or [])]
    return user_out(doc, notes)


def list_users() -> List[Dict[str, Any]]:
    """Todos los usuarios con sus notas resueltas."""
    _log.debug("Fetching users")
    return [_with_notes(u) for u in user_repo.list_users()]


def get_user(user_id: str) -> Dict[str, Any]:
    u = user_repo.get_user_by_id(user_id)
    if not u:
        raise NotFoundError("User not found")
    return _with_notes(u)


def get_author(user_id: str) -> Dict[str, Any]:
    """Usuario sin resolver sus notas (solo `note_ids`)."""
    u = user_repo.get_user_by_id(user_id)
    if not u:
        raise NotFoundError("Author not found")
    return user_out(u)


def create_user(username: str, email: str, password: str) -> Dict[str, Any]:
    """
    Registra un usuario nuevo.

    - Falla con ConflictError si el email o el username ya existen.
    - El password se hashea antes de cualquier escritura: si el hashing falla
      no queda ningún usuario parcial en la colección.
    """
    username = (username or "").strip()
    email = (email or "").strip().lower()
    if not username or not email or not password:
        raise InvalidArgumentError("username, email and password are required")

    if user_repo.find_user_by_email_or_username(email, username):
        raise ConflictError("User with this email or username already exists")

    password_hash = hash_password(password)
    user_id = user_repo.insert_user(
        {"username": username, "email": email, "password_hash": password_hash, "notes": []}
    )
    _log.info("User created id=%s username=%s", user_id, username)
    return get_user(user_id)
