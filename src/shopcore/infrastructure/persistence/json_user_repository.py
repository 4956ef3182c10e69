"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from shopcore.domain.model.user import User
from shopcore.domain.repository.user_repository import UserRepository
from shopcore.infrastructure.persistence.json_file import JsonFile


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return User(id=raw["id"], name=raw["name"], push_token=raw.get("pushToken"))
        return None

    def save(self, user: User) -> None:
        with self._file.locked():
            records = [raw for raw in self._file.load() if raw["id"] != user.id]
            records.append({"id": user.id, "name": user.name, "pushToken": user.push_token})
            self._file.persist(records)
