# config.py
"""Konfigurasi aplikasi memakai Pydantic Settings"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from faraidh.rules.loader import load_policy
from schemas import InheritancePolicy


class Settings(BaseSettings):
    """Konfigurasi dibaca dari environment (prefix FARAIDH_) atau file .env"""

    model_config = SettingsConfigDict(
        env_prefix="FARAIDH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "kalkulator-faraidh"
    log_level: str = "INFO"

    # Kebijakan default (dipakai bila request tidak membawa policy)
    policy_file: Optional[str] = None
    max_bequest_fraction: str = "1/3"
    radd_includes_spouse: bool = False
    grandfather_mode: Literal["COMPETE_WITH_SIBLINGS", "LIKE_FATHER"] = "COMPETE_WITH_SIBLINGS"
    mother_sibling_rule: Literal["COUNT_ALL", "EXCLUDE_UTERINE"] = "COUNT_ALL"
    mushtarakah_policy: Literal["UMAR", "STANDARD"] = "UMAR"


settings = Settings()


def default_policy(current: Optional[Settings] = None) -> InheritancePolicy:
    """Policy bawaan: dari file JSON bila `policy_file` diisi, selain itu dari field settings."""
    current = current or settings
    if current.policy_file:
        return load_policy(current.policy_file)
    return InheritancePolicy(
        max_bequest_fraction=current.max_bequest_fraction,
        radd_includes_spouse=current.radd_includes_spouse,
        grandfather_mode=current.grandfather_mode,
        mother_sibling_rule=current.mother_sibling_rule,
        mushtarakah_policy=current.mushtarakah_policy,
    )
