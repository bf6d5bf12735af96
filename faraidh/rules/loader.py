import json
from pathlib import Path
from typing import Any, Dict

from schemas import InheritancePolicy


def load_json(path: str) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_policy(path: str) -> InheritancePolicy:
    """Baca policy waris dari file JSON (kunci = nama field InheritancePolicy)."""
    return InheritancePolicy.model_validate(load_json(path))
