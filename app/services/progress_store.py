import json
import os
import threading
from typing import Dict, Iterable, List, Set
from app.core.config import app_config
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class StepProgressStore:
    """
    Completed-step indices per recipe, kept in a small JSON file.

    Keys are "recipe-steps-<id>" and values are sorted index lists, so the
    file stays readable and stable between saves.
    """

    KEY_PREFIX = "recipe-steps-"

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def load(self, recipe_id: str) -> Set[int]:
        with self._lock:
            data = self._read()
        return set(data.get(self._key(recipe_id), []))

    def save(self, recipe_id: str, completed: Iterable[int]) -> Set[int]:
        steps = _validate(completed)
        with self._lock:
            data = self._read()
            data[self._key(recipe_id)] = sorted(steps)
            self._write(data)
        return steps

    def toggle(self, recipe_id: str, index: int) -> Set[int]:
        _validate([index])
        with self._lock:
            data = self._read()
            steps = set(data.get(self._key(recipe_id), []))
            steps ^= {index}
            data[self._key(recipe_id)] = sorted(steps)
            self._write(data)
        return steps

    def clear(self, recipe_id: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(self._key(recipe_id), None) is not None:
                self._write(data)

    def _key(self, recipe_id: str) -> str:
        return f"{self.KEY_PREFIX}{recipe_id}"

    def _read(self) -> Dict[str, List[int]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(f"Ignoring unreadable progress file {self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {
            key: [i for i in value if isinstance(i, int) and i >= 0]
            for key, value in data.items()
            if isinstance(value, list)
        }

    def _write(self, data: Dict[str, List[int]]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w") as handle:
            json.dump(data, handle, indent=2, sort_keys=True)


def _validate(indices: Iterable[int]) -> Set[int]:
    steps = set(indices)
    if any(i < 0 for i in steps):
        raise ValueError("Step indices must be non-negative")
    return steps


progress_store = StepProgressStore(app_config.progress_store_path)
