"""``kirimase update-config`` -- bring an older config file up to date."""

from __future__ import annotations

from ..config import Config, ConfigStore


def update_config(store: ConfigStore) -> Config:
    return store.update_after_upgrade()
