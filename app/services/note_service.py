"""
Capa de servicios para notas: normalización de tags y mantenimiento de la
referencia inversa `user.notes`.

Crear y borrar una nota son dos escrituras independientes (nota + autor).
No hay transacción: si la segunda falla, la nota queda sin (o con una)
referencia en el autor. Se loggea y se propaga el error, sin reparar.
"""
import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import InvalidArgumentError, NotFoundError
from app.repositories import note_repo, user_repo
from app.services.user_service import note_out, user_summary

_log = logging.getLogger("notegraph.services.note")


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Tags en minúsculas, respetando el orden recibido."""
    return [str(t).lower() for t in (tags or [])]


def _with_author(doc: Dict[str, Any], author: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if author is None:
        author = user_repo.get_user_by_id(doc.get("author"), projection=user_repo.SUMMARY_PROJECTION)
    out = note_out(doc)
    out["author"] = user_summary(author) if author else None
    return out


def list_notes() -> List[Dict[str, Any]]:
    """Todas las notas con el autor resuelto a (username, email)."""
    _log.debug("Fetching notes")
    return [_with_author(n) for n in note_repo.list_notes()]


def get_note(note_id: str) -> Dict[str, Any]:
    doc = note_repo.get_note_by_id(note_id)
    if not doc:
        raise NotFoundError("Note not found")
    return _with_author(doc)


def get_notes_by_ids(note_ids: List[Any]) -> List[Dict[str, Any]]:
    """Notas en el orden de `note_ids`, sin resolver autor."""
    return [note_out(n) for n in note_repo.list_notes_by_ids(note_ids)]


def list_notes_by_tag(tag: Any) -> List[Dict[str, Any]]:
    if not tag or not isinstance(tag, str) or not tag.strip():
        raise InvalidArgumentError("Invalid tag provided")
    return [_with_author(n) for n in note_repo.list_notes(tag=tag.strip().lower())]


def create_note(title: str, content: str, tags: Optional[List[str]], author_id: str) -> Dict[str, Any]:
    """
    Crea la nota y agrega su id al final de `notes` del autor.

    El autor se valida antes de escribir: con un authorId inexistente no
    se crea ninguna nota huérfana.
    """
    if not title or not content or not author_id:
        raise InvalidArgumentError("title, content and authorId are required")

    author = user_repo.get_user_by_id(author_id)
    if not author:
        raise NotFoundError("Author not found")

    note_id = note_repo.insert_note(
        {"title": title, "content": content, "author": author["_id"], "tags": normalize_tags(tags)}
    )
    doc = note_repo.get_note_by_id(note_id)
    try:
        user_repo.add_note_ref(author["_id"], doc["_id"])
    except Exception:
        _log.error("Note %s created but author %s back-reference was not updated", note_id, author["_id"])
        raise
    _log.info("Note created id=%s author=%s", note_id, author["_id"])
    return _with_author(doc, author)


def update_note(
    note_id: str,
    title: Optional[str] = None,
    content: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Actualización parcial: solo se sobreescriben los campos recibidos."""
    fields: Dict[str, Any] = {}
    if title:
        fields["title"] = title
    if content:
        fields["content"] = content
    if tags is not None:
        fields["tags"] = normalize_tags(tags)

    doc = note_repo.update_note(note_id, fields)
    if not doc:
        raise NotFoundError("Note not found")
    return _with_author(doc)


def delete_note(note_id: str) -> bool:
    doc = note_repo.delete_note(note_id)
    if not doc:
        raise NotFoundError("Note not found")
    try:
        user_repo.remove_note_ref(doc["author"], doc["_id"])
    except Exception:
        _log.error("Note %s deleted but author %s still references it", doc["_id"], doc.get("author"))
        raise
    _log.info("Note deleted id=%s", doc["_id"])
    return True
