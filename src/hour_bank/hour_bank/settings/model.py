from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SyncConfig:
    script_url: str = ""
    enabled: bool = False

    @property
    def is_active(self) -> bool:
        return self.enabled and self.script_url.startswith("http")


@dataclass(frozen=True)
class LocationConfig:
    use_fixed: bool = False
    fixed_name: str = ""
