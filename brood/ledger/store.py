"""Key/value state storage.

Values are opaque strings (callers JSON-serialize). Backed by a single JSON
document on disk, or held in memory when no path is given.
Thread-safe with file locking on write.
"""
import fcntl
import json
from pathlib import Path


class KVStore:
    """String key/value storage backed by a JSON file.

    Attributes:
        path: Path to the JSON file, or None for an in-memory store
    """

    def __init__(self, path: str | None = None):
        """Initialize KVStore.

        Args:
            path: Path to JSON file for state storage (None keeps state in memory)
        """
        self.path = Path(path) if path else None
        self._memory: dict[str, str] = {}
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("{}")

    def get(self, key: str) -> str | None:
        """Return the stored value for key, or None."""
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key.

        Thread-safe with file locking.
        """
        if self.path is None:
            self._memory[key] = value
            return

        with open(self.path, "r+") as f:
            # Acquire exclusive lock for the read-modify-write
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                data = _decode(f.read())
                data[key] = value
                f.seek(0)
                f.truncate()
                f.write(json.dumps(data, sort_keys=True))
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def delete(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""
        if self.path is None:
            return self._memory.pop(key, None) is not None

        with open(self.path, "r+") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                data = _decode(f.read())
                existed = data.pop(key, None) is not None
                f.seek(0)
                f.truncate()
                f.write(json.dumps(data, sort_keys=True))
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        return existed

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with prefix, sorted."""
        return sorted(k for k in self._read() if k.startswith(prefix))

    def get_json(self, key: str, default=None):
        """Return the JSON-decoded value for key.

        Missing or malformed values yield default.
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return default

    def set_json(self, key: str, value) -> None:
        """JSON-encode value and store it under key."""
        self.set(key, json.dumps(value, sort_keys=True))

    def _read(self) -> dict[str, str]:
        if self.path is None:
            return self._memory
        with open(self.path, "r") as f:
            return _decode(f.read())


def _decode(text: str) -> dict[str, str]:
    # A corrupted state file reads as empty
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}
