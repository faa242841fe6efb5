from __future__ import annotations
import json, logging, os
from typing import Any, Dict
from blursave.domain.ports import PreferenceStore


class StorageLocal(PreferenceStore):
    """Local filesystem key-value store for user prefs (JSON)."""

    FILENAME = "user_prefs.json"

    def __init__(self, root_dir: str = ".") -> None:
        self._log = logging.getLogger(__name__)
        self.root = root_dir

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.FILENAME)

    # ---- Key-value access ----
    def get(self, key: str, default: Any = None) -> Any:
        return self.load_user_prefs().get(key, default)

    def set(self, key: str, value: Any) -> None:
        try:
            prefs = self.load_user_prefs()
        except ValueError as exc:
            # unparsable file: start over rather than keep failing every write
            self._log.warning("Overwriting unreadable %s: %s", self.path, exc)
            prefs = {}
        prefs[key] = value
        self.save_user_prefs(prefs)

    # ---- User prefs (JSON) ----
    def save_user_prefs(self, prefs: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(prefs, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def load_user_prefs(self) -> Dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{self.path} does not contain a JSON object.")
        return payload
