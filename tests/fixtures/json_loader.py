import copy
import json
from pathlib import Path
from typing import Any, Dict


class TestDataLoader:
    """Shared request payloads and identities for the integration suite"""

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get_copy(cls, key: str) -> Any:
        return copy.deepcopy(cls.load().get(key))

    @classmethod
    def identity(cls, name: str) -> Dict[str, str]:
        """external_id/email pair of a named user, ready for make_user(**...)"""
        users = cls.load()["users"]
        if name not in users:
            raise KeyError(f"No test identity named {name!r}")
        return dict(users[name])
