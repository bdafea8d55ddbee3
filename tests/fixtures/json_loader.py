import copy
import json
from pathlib import Path
from typing import Any, Dict


class SessionPayloads:
    """Request payloads shared by the API tests (tests/fixtures/test_data.json)"""

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get(cls, key: str, **overrides: Any) -> Dict[str, Any]:
        """Deep copy of a named payload with top-level overrides applied"""
        payload = copy.deepcopy(cls.load()[key])
        payload.update(overrides)
        return payload
