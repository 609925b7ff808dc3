from pymongo.errors import PyMongoError

from app.infrastructure.db import mongo
from app.services import note_service, user_service
from conftest import gql

CREATE_USER = """
mutation CreateUser($input: CreateUserInput!) {
  createUser(input: $input) { id username email notes { id } createdAt updatedAt }
}
"""

CREATE_NOTE = """
mutation CreateNote($input: CreateNoteInput!) {
  createNote(input: $input) { id title content tags author { id username } }
}
"""


def _create_user(client, username="alice", email="alice@example.com"):
    body = gql(client, CREATE_USER, {"input": {"username": username, "email": email, "password": "pw"}})
    assert "errors" not in body
    return body["data"]["createUser"]


def _create_note(client, author_id, title="Title", tags=None):
    body = gql(
        client,
        CREATE_NOTE,
        {"input": {"title": title, "content": "Body", "tags": tags or [], "authorId": author_id}},
    )
    assert "errors" not in body
    return body["data"]["createNote"]


def test_empty_lists(client, db):
    body = gql(client, "{ users { id } notes { id } }")
    assert body == {"data": {"users": [], "notes": []}}


def test_create_user_and_query_it(client, db):
    user = _create_user(client)
    assert user["notes"] == []
    assert user["createdAt"]

    body = gql(client, "query U($id: ID!) { user(id: $id) { username email } }", {"id": user["id"]})
    assert body["data"]["user"] == {"username": "alice", "email": "alice@example.com"}


def test_create_user_conflict_message(client, db):
    _create_user(client)
    body = gql(client, CREATE_USER, {"input": {"username": "alice", "email": "x@example.com", "password": "pw"}})

    assert body["data"] is None
    assert body["errors"][0]["message"] == "User with this email or username already exists"


def test_password_is_not_part_of_the_schema(client, db):
    _create_user(client)
    resp = client.post("/graphql", json={"query": "{ users { password } }"})
    assert resp.json()["errors"]


def test_create_note_lowercases_tags_and_links_author(client, db):
    user = _create_user(client)
    note = _create_note(client, user["id"], tags=["A", "b"])

    assert note["tags"] == ["a", "b"]
    assert note["author"] == {"id": user["id"], "username": "alice"}

    body = gql(client, "query U($id: ID!) { user(id: $id) { notes { id title author { username } } } }", {"id": user["id"]})
    assert body["data"]["user"]["notes"] == [{"id": note["id"], "title": "Title", "author": {"username": "alice"}}]


def test_create_note_unknown_author(client, db):
    body = gql(
        client,
        CREATE_NOTE,
        {"input": {"title": "T", "content": "C", "tags": [], "authorId": "64b7f0f0f0f0f0f0f0f0f0f0"}},
    )
    assert body["errors"][0]["message"] == "Author not found"
    assert gql(client, "{ notes { id } }")["data"]["notes"] == []


def test_notes_by_tag(client, db):
    user = _create_user(client)
    first = _create_note(client, user["id"], title="first", tags=["Important"])
    _create_note(client, user["id"], title="second", tags=["other"])

    body = gql(client, 'query { notesByTag(tag: "important") { id title } }')
    assert body["data"]["notesByTag"] == [{"id": first["id"], "title": "first"}]


def test_notes_by_tag_empty_tag_is_an_error(client, db):
    body = gql(client, 'query { notesByTag(tag: "") { id } }')
    assert body["errors"][0]["message"] == "Invalid tag provided"


def test_update_note_partial(client, db):
    user = _create_user(client)
    note = _create_note(client, user["id"], tags=["x"])

    body = gql(
        client,
        "mutation U($id: ID!, $tags: [String!]) { updateNote(id: $id, tags: $tags) { title content tags } }",
        {"id": note["id"], "tags": ["NEW"]},
    )
    assert body["data"]["updateNote"] == {"title": "Title", "content": "Body", "tags": ["new"]}


def test_delete_note(client, db):
    user = _create_user(client)
    note = _create_note(client, user["id"])

    body = gql(client, "mutation D($id: ID!) { deleteNote(id: $id) }", {"id": note["id"]})
    assert body["data"]["deleteNote"] is True

    body = gql(client, "query N($id: ID!) { note(id: $id) { id } }", {"id": note["id"]})
    assert body["data"]["note"] is None
    assert body["errors"][0]["message"] == "Note not found"

    body = gql(client, "query U($id: ID!) { user(id: $id) { notes { id } } }", {"id": user["id"]})
    assert body["data"]["user"]["notes"] == []


def test_delete_missing_note(client, db):
    body = gql(client, "mutation { deleteNote(id: \"64b7f0f0f0f0f0f0f0f0f0f0\") }")
    assert body["errors"][0]["message"] == "Note not found"


def test_infrastructure_failure_is_a_generic_message(client, monkeypatch):
    # No database: not-found and infrastructure faults both arrive as plain messages.
    monkeypatch.setattr(mongo, "_db", None)

    body = gql(client, "{ users { id } }")
    assert body["data"] is None
    assert body["errors"][0]["message"] == "Failed to fetch users"


def test_user_notes_failure_is_a_generic_message(client, db, monkeypatch):
    user = _create_user(client)
    _create_note(client, user["id"])

    def boom(note_ids):
        raise PyMongoError("connection refused to mongo-internal:27017")

    monkeypatch.setattr(note_service, "get_notes_by_ids", boom)
    body = gql(client, "{ users { notes { id } } }")

    assert body["data"] is None
    assert body["errors"][0]["message"] == "Failed to fetch user notes"
    assert "mongo-internal" not in str(body["errors"])


def test_note_author_failure_is_a_generic_message(client, db, monkeypatch):
    user = _create_user(client)
    _create_note(client, user["id"])

    def boom(user_id):
        raise PyMongoError("auth db down @10.0.0.5")

    monkeypatch.setattr(user_service, "get_author", boom)
    body = gql(client, "{ notes { author { username } } }")

    assert body["data"] is None
    assert body["errors"][0]["message"] == "Failed to fetch note author"
    assert "10.0.0.5" not in str(body["errors"])
