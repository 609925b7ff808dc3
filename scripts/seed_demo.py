"""Seed de datos de ejemplo (usuarios y notas) vía la capa de servicios.

Uso típico:
  PYTHONPATH=. python scripts/seed_demo.py
  PYTHONPATH=. python scripts/seed_demo.py --notes-per-user 3

Idempotente para usuarios: si el username/email ya existe se reutiliza.
"""
from __future__ import annotations

import argparse
from typing import Any, Dict, List

from app.core.exceptions import ConflictError
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db.mongo import db_ready, init_mongo
from app.repositories import user_repo
from app.services import note_service, user_service


USERS: List[Dict[str, str]] = [
    {"username": "alice", "email": "alice@example.com", "password": "alice-secret"},
    {"username": "bob", "email": "bob@example.com", "password": "bob-secret"},
]

NOTES: List[Dict[str, Any]] = [
    {"title": "Groceries", "content": "Milk, eggs, coffee", "tags": ["Personal", "Shopping"]},
    {"title": "Standup", "content": "Review the GraphQL schema", "tags": ["Work", "Important"]},
    {"title": "Reading list", "content": "Designing Data-Intensive Applications", "tags": ["Books"]},
]


def _ensure_user(spec: Dict[str, str]) -> str:
    try:
        return user_service.create_user(spec["username"], spec["email"], spec["password"])["id"]
    except ConflictError:
        existing = user_repo.find_user_by_email_or_username(spec["email"], spec["username"])
        return str(existing["_id"])


def main() -> None:
    ap = argparse.ArgumentParser(description="Carga usuarios y notas de ejemplo")
    ap.add_argument("--notes-per-user", type=int, default=len(NOTES), help="Notas a crear por usuario")
    args = ap.parse_args()

    init_mongo()
    if not db_ready():
        raise SystemExit("Mongo no accesible; revisa MONGO_URI")
    ensure_collections()

    for spec in USERS:
        user_id = _ensure_user(spec)
        for note in NOTES[: max(args.notes_per_user, 0)]:
            note_service.create_note(note["title"], note["content"], note["tags"], user_id)
        print(f"{spec['username']}: listo ({user_id})")


if __name__ == "__main__":
    main()
