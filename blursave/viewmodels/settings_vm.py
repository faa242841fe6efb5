from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, List, Optional

from ..domain.ports import PreferenceStore

PREF_ENABLED = "blursave.enabled"


@dataclass
class AutosaveConfig:
    """Typed plugin settings that persist via a PreferenceStore."""

    enabled: bool = True


class AutosaveSettingsVM:
    """Keeps the save-on-focus-lost toggle and persists it, no UI here."""

    def __init__(
        self,
        store: PreferenceStore,
        *,
        config: Optional[AutosaveConfig] = None,
        on_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.store = store
        self.config = config or AutosaveConfig()
        self._listeners: List[Callable[[bool], None]] = []
        if on_changed:
            self._listeners.append(on_changed)

    # ------------------------------------------------------------------
    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def load(self) -> bool:
        """Read the persisted toggle; a missing or unreadable value keeps the default."""
        try:
            raw = self.store.get(PREF_ENABLED, None)
        except (OSError, ValueError) as exc:
            self._log.warning("Could not read preferences, keeping %s=%s: %s", PREF_ENABLED, self.enabled, exc)
            return self.enabled
        if raw is None:
            return self.enabled
        try:
            value = self._coerce_bool(raw)
        except ValueError as exc:
            self._log.warning("Ignoring stored %s: %s", PREF_ENABLED, exc)
            return self.enabled
        self.config = replace(self.config, enabled=value)
        return value

    def set_enabled(self, enabled: Any) -> bool:
        """Apply and persist the toggle; a failed write keeps the new value for this session."""
        value = self._coerce_bool(enabled)
        changed = value != self.enabled
        self.config = replace(self.config, enabled=value)
        try:
            self.store.set(PREF_ENABLED, value)
        except (OSError, ValueError) as exc:
            self._log.warning("Could not persist %s=%s: %s", PREF_ENABLED, value, exc)
        if changed:
            self._log.info("Save on focus lost %s", "enabled" if value else "disabled")
            for listener in list(self._listeners):
                listener(value)
        return value

    def toggle(self) -> bool:
        return self.set_enabled(not self.enabled)

    def add_listener(self, listener: Callable[[bool], None]) -> None:
        self._listeners.append(listener)

    def to_dict(self) -> dict:
        return asdict(self.config)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in {"1", "true", "yes", "on"}:
                return True
            if text in {"0", "false", "no", "off", ""}:
                return False
        raise ValueError(f"{value!r} is not a boolean setting.")


__all__ = ["AutosaveConfig", "AutosaveSettingsVM", "PREF_ENABLED"]
