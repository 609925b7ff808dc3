"""
Schema GraphQL: raíces Query/Mutation y el router montado en FastAPI.

Cada raíz pasa por `surface_errors` (ver `errors.py`).
"""
from typing import List, Optional

import strawberry
from strawberry.fastapi import GraphQLRouter

from app.api.graphql.errors import surface_errors as _surface
from app.api.graphql.types import CreateNoteInput, CreateUserInput, Note, User
from app.core.config import settings
from app.services import note_service, user_service


@strawberry.type
class Query:
    @strawberry.field
    def users(self) -> List[User]:
        with _surface("fetch users"):
            return [User.from_out(u) for u in user_service.list_users()]

    @strawberry.field
    def user(self, id: strawberry.ID) -> Optional[User]:
        with _surface("fetch user"):
            return User.from_out(user_service.get_user(id))

    @strawberry.field
    def notes(self) -> List[Note]:
        with _surface("fetch notes"):
            return [Note.from_out(n) for n in note_service.list_notes()]

    @strawberry.field
    def note(self, id: strawberry.ID) -> Optional[Note]:
        with _surface("fetch note"):
            return Note.from_out(note_service.get_note(id))

    @strawberry.field
    def notes_by_tag(self, tag: str) -> List[Note]:
        with _surface("fetch notes by tag"):
            return [Note.from_out(n) for n in note_service.list_notes_by_tag(tag)]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_user(self, input: CreateUserInput) -> User:
        with _surface("create user"):
            return User.from_out(user_service.create_user(input.username, input.email, input.password))

    @strawberry.mutation
    def create_note(self, input: CreateNoteInput) -> Note:
        with _surface("create note"):
            created = note_service.create_note(input.title, input.content, input.tags, input.author_id)
            return Note.from_out(created)

    @strawberry.mutation
    def update_note(
        self,
        id: strawberry.ID,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Note:
        with _surface("update note"):
            return Note.from_out(note_service.update_note(id, title=title, content=content, tags=tags))

    @strawberry.mutation
    def delete_note(self, id: strawberry.ID) -> bool:
        with _surface("delete note"):
            return note_service.delete_note(id)


schema = strawberry.Schema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, graphql_ide="graphiql" if settings.graphql_ide else None)
