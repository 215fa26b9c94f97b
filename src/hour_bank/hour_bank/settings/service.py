from __future__ import annotations

from typing import List, Optional, Union

from ..storage.collection import Collection
from .model import LocationConfig, SyncConfig

SettingsItem = Union[SyncConfig, LocationConfig]


class SettingsService:
    """Sync and location configuration, stored together in one collection."""

    def __init__(self, settings: Collection[SettingsItem], *, default_script_url: str = ""):
        self._settings = settings
        self._default_script_url = (default_script_url or "").strip()

    def _find(self, kind: type) -> Optional[SettingsItem]:
        return next((s for s in self._settings.get() if isinstance(s, kind)), None)

    def _save(self, item: SettingsItem) -> None:
        items: List[SettingsItem] = [s for s in self._settings.get() if not isinstance(s, type(item))]
        items.append(item)
        self._settings.put(items)

    def get_sync_config(self) -> SyncConfig:
        stored = self._find(SyncConfig)
        if stored and stored.script_url:
            return stored
        if self._default_script_url:
            # Fallback for fresh devices: deployment-level script URL.
            return SyncConfig(script_url=self._default_script_url, enabled=True)
        return stored or SyncConfig()

    def save_sync_config(self, *, script_url: str, enabled: Optional[bool] = None) -> SyncConfig:
        script_url = (script_url or "").strip()
        if enabled is None:
            enabled = bool(script_url)
        config = SyncConfig(script_url=script_url, enabled=bool(enabled) and bool(script_url))
        self._save(config)
        return config

    def get_location_config(self) -> LocationConfig:
        return self._find(LocationConfig) or LocationConfig()

    def save_location_config(self, *, use_fixed: bool, fixed_name: str = "") -> LocationConfig:
        config = LocationConfig(use_fixed=bool(use_fixed), fixed_name=(fixed_name or "").strip())
        self._save(config)
        return config
