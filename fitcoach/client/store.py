# client/store.py
"""
Durable local copy of the active profile/plan pair.

Both blobs live under fixed keys in a small key/value storage, mirroring
browser localStorage: `fitnessPlan` and `userData`, JSON text, no version field.
"""

import json
import logging
import os
import tempfile
from typing import Protocol

from pydantic import ValidationError

from ..core.errors import StoreError
from ..schemas.plan import FitnessPlan
from ..schemas.profile import UserProfile

logger = logging.getLogger(__name__)

PLAN_KEY = "fitnessPlan"
PROFILE_KEY = "userData"


class LocalStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self):
        self.items: dict[str, str] = {}

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value

    def remove_item(self, key):
        self.items.pop(key, None)


class FileStorage:
    """All keys in one JSON file; every write replaces the file atomically."""

    def __init__(self, directory: str, filename: str = "storage.json"):
        self.path = os.path.join(directory, filename)

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.warning("Ignoring unreadable storage file %s", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get_item(self, key):
        return self._read().get(key)

    def set_item(self, key, value):
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key):
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class PlanStore:
    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def save(self, profile: UserProfile, plan: FitnessPlan) -> None:
        plan_text = plan.model_dump_json(by_alias=True)
        profile_text = profile.model_dump_json(by_alias=True, exclude_none=True)
        try:
            self.storage.set_item(PLAN_KEY, plan_text)
            self.storage.set_item(PROFILE_KEY, profile_text)
            # 쓰기 후 검증: 둘 중 하나라도 다르면 저장본 전체를 신뢰하지 않음
            verified = (
                self.storage.get_item(PLAN_KEY) == plan_text
                and self.storage.get_item(PROFILE_KEY) == profile_text
            )
        except OSError as e:
            self.clear()
            raise StoreError(f"Could not save plan: {e}") from e
        if not verified:
            self.clear()
            raise StoreError("Saved plan could not be verified")
        logger.debug("Saved plan for %s", profile.name)

    def load(self) -> tuple[UserProfile, FitnessPlan] | None:
        plan_text = self.storage.get_item(PLAN_KEY)
        profile_text = self.storage.get_item(PROFILE_KEY)
        if not plan_text or not profile_text:
            return None
        try:
            plan = FitnessPlan.model_validate_json(plan_text)
            profile = UserProfile.model_validate_json(profile_text)
        except ValidationError as e:
            logger.warning("Stored plan is corrupt, ignoring it: %s", e)
            return None
        return profile, plan

    def clear(self) -> None:
        self.storage.remove_item(PLAN_KEY)
        self.storage.remove_item(PROFILE_KEY)
