"""
Tipos GraphQL (strawberry) para `User` y `Note`.

`User.notes` y `Note.author` se resuelven bajo demanda por cada entidad
devuelta, sin batching ni caché compartida: N padres implican N búsquedas.
"""
from typing import Any, Dict, List

import strawberry

from app.api.graphql.errors import surface_errors
from app.services import note_service, user_service


@strawberry.type
class User:
    id: strawberry.ID
    username: str
    email: str
    created_at: str
    updated_at: str
    note_ids: strawberry.Private[List[str]]

    @strawberry.field
    def notes(self) -> List["Note"]:
        with surface_errors("fetch user notes"):
            return [Note.from_out(n) for n in note_service.get_notes_by_ids(self.note_ids)]

    @classmethod
    def from_out(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=strawberry.ID(data["id"]),
            username=data["username"],
            email=data["email"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            note_ids=list(data.get("note_ids") or []),
        )


@strawberry.type
class Note:
    id: strawberry.ID
    title: str
    content: str
    tags: List[str]
    created_at: str
    updated_at: str
    author_id: strawberry.Private[str]

    @strawberry.field
    def author(self) -> User:
        with surface_errors("fetch note author"):
            return User.from_out(user_service.get_author(self.author_id))

    @classmethod
    def from_out(cls, data: Dict[str, Any]) -> "Note":
        return cls(
            id=strawberry.ID(data["id"]),
            title=data["title"],
            content=data["content"],
            tags=list(data.get("tags") or []),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            author_id=data["author_id"],
        )


@strawberry.input
class CreateUserInput:
    username: str
    email: str
    password: str


@strawberry.input
class CreateNoteInput:
    title: str
    content: str
    author_id: strawberry.ID
    tags: List[str] = strawberry.field(default_factory=list)
