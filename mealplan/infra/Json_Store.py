"""JSON file persistence shared by the repositories (atomic writes, tolerant reads)."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Generic, List, Optional, TypeVar

from mealplan.utilities.errors import EntityNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def read_json(path: Path, default: Any):
    """Read a JSON document, returning `default` when the file is missing or unreadable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning(f"Data file not found: {path}. Using empty data.")
        return default
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        return default


def parse_entries(raw: List[dict], from_dict: Callable[[dict], T], kind: str, source: str) -> List[T]:
    """Build entities from stored dicts, logging and skipping entries that fail to parse."""
    entities = []
    for entry in raw:
        try:
            entities.append(from_dict(entry))
        except (ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid {kind} entry in {source}: {e}")
    return entities


def atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON through a temp file in the same directory, then move it into place."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, str(path))
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


class JsonCollection(Generic[T]):
    """A list of entities stored as a JSON array, addressed by their `id`.

    Entity classes provide `from_dict` / `to_dict` and an `id` attribute.
    """

    def __init__(self, path: Path, from_dict: Callable[[dict], T], kind: str):
        self.path = Path(path)
        self._from_dict = from_dict
        self.kind = kind
        self._lock = RLock()

    def _load(self) -> List[dict]:
        data = read_json(self.path, [])
        if not isinstance(data, list):
            logger.error(f"Expected a list in {self.path}, found {type(data).__name__}")
            return []
        return data

    def _parse(self, raw: List[dict]) -> List[T]:
        return parse_entries(raw, self._from_dict, self.kind, self.path.name)

    def get_all(self) -> List[T]:
        with self._lock:
            return self._parse(self._load())

    def get(self, entity_id: str) -> Optional[T]:
        for entity in self.get_all():
            if entity.id == entity_id:
                return entity
        return None

    def add(self, entity: T) -> T:
        with self._lock:
            raw = self._load()
            if any(e.get('id') == entity.id for e in raw):
                raise ValueError(f"{self.kind} '{entity.id}' already exists")
            raw.append(entity.to_dict())
            atomic_write_json(self.path, raw)
        return entity

    def update(self, entity: T) -> T:
        with self._lock:
            raw = self._load()
            for idx, e in enumerate(raw):
                if e.get('id') == entity.id:
                    raw[idx] = entity.to_dict()
                    atomic_write_json(self.path, raw)
                    return entity
        raise EntityNotFoundError(self.kind, entity.id)

    def delete(self, entity_id: str) -> bool:
        with self._lock:
            raw = self._load()
            kept = [e for e in raw if e.get('id') != entity_id]
            if len(kept) == len(raw):
                return False
            atomic_write_json(self.path, kept)
            return True

    def replace_all(self, entities: List[T]) -> None:
        with self._lock:
            atomic_write_json(self.path, [e.to_dict() for e in entities])
