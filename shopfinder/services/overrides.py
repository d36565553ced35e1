from __future__ import annotations

import functools
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from shopfinder.core.config import get_settings
from shopfinder.schemas.catalogue import ShopOverride

logger = logging.getLogger(__name__)

_OVERRIDE_MAP = TypeAdapter(dict[str, ShopOverride])


class OverrideStoreError(Exception):
    """Raised when a shopkeeper edit cannot be written to disk."""


class OverrideStore:
    """Shopkeeper edits keyed by shop name.

    Saving is a keyed overwrite: new fields are laid over whatever was saved
    for that shop before. When ``path`` is set the whole map is rewritten to
    that JSON file after every save.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._overrides: dict[str, ShopOverride] = self._load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _load(self) -> dict[str, ShopOverride]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            overrides = _OVERRIDE_MAP.validate_python(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable override file %s: %s", self._path, exc)
            return {}
        logger.info("Loaded overrides for %d shops from %s", len(overrides), self._path)
        return overrides

    def _persist(self) -> None:
        if self._path is None:
            return
        payload = {name: override.set_fields() for name, override in self._overrides.items()}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic swap: the file on disk is always a complete old or new map
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
            tmp_path = Path(tmp_name)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, indent=2)
                tmp_path.replace(self._path)
            except BaseException:
                tmp_path.unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise OverrideStoreError(f"Could not write overrides to {self._path}: {exc}") from exc

    def get(self, shop_name: str) -> Optional[ShopOverride]:
        return self._overrides.get(shop_name)

    def all(self) -> dict[str, ShopOverride]:
        return dict(self._overrides)

    def save(self, shop_name: str, override: ShopOverride) -> ShopOverride:
        with self._lock:
            previous = self._overrides.get(shop_name)
            fields = previous.set_fields() if previous is not None else {}
            fields.update(override.set_fields())
            merged = ShopOverride.model_validate(fields)
            self._overrides[shop_name] = merged
            try:
                self._persist()
            except OverrideStoreError:
                if previous is None:
                    del self._overrides[shop_name]
                else:
                    self._overrides[shop_name] = previous
                raise
        logger.info("Saved override for %s (%s)", shop_name, ", ".join(sorted(fields)) or "no fields")
        return merged

    def clear(self) -> None:
        with self._lock:
            self._overrides = {}
            self._persist()


@functools.lru_cache()
def get_override_store() -> OverrideStore:
    return OverrideStore(get_settings().override_store_path)


__all__ = ["OverrideStore", "OverrideStoreError", "get_override_store"]
