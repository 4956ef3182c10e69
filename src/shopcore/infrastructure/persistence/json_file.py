"""A JSON array on disk, shared by the JSON repositories.

Check-then-write sequences (version compare, id allocation) run inside
``locked()``.  That takes a per-path thread lock and an exclusive
``flock`` on a sidecar ``.lock`` file, so separate ``shopcore`` processes
working on the same data directory are serialized too.  ``locked()`` is
re-entrant; the file lock is only taken by the outermost caller.
"""

from __future__ import annotations

import fcntl
import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class _PathLock:

    def __init__(self, lock_path: Path) -> None:
        self.lock_path = lock_path
        self.thread_lock = threading.RLock()
        self.depth = 0


_locks: dict[Path, _PathLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> _PathLock:
    resolved = path.resolve()
    with _locks_guard:
        if resolved not in _locks:
            _locks[resolved] = _PathLock(resolved.with_name(resolved.name + ".lock"))
        return _locks[resolved]


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = _lock_for(file_path)

    @contextmanager
    def locked(self) -> Iterator[None]:
        lock = self._lock
        with lock.thread_lock:
            if lock.depth > 0:
                lock.depth += 1
                try:
                    yield
                finally:
                    lock.depth -= 1
                return

            with open(lock.lock_path, "w") as lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                lock.depth = 1
                try:
                    yield
                finally:
                    lock.depth = 0
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def load(self) -> list[dict]:
        # Writers replace the file atomically, so a read never sees half a write
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        with self.locked():
            tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
