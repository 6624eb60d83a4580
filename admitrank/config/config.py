# admitrank/config/config.py
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from admitrank.domain.constants import MAX_SCORE_PER_SUBJECT
from admitrank.domain.models import Policy

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_DATA_DIR = _PROJECT_ROOT / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    # environment
    env: str = Field("dev", alias="ENV")
    # explicit level name (DEBUG, INFO, ...); empty → derived from env
    log_level: str = Field("", alias="LOG_LEVEL")
    data_dir: Path = Field(_DEFAULT_DATA_DIR, alias="DATA_DIR")
    snapshot_filename: str = Field("roster.json", alias="SNAPSHOT_FILENAME")

    # ───────────────── Admission policy defaults ─────────────────────
    # Used only when the roster snapshot carries no "criteria" block.
    enable_district_priority: bool = Field(False, alias="ADMIT_DISTRICT_PRIORITY")
    enable_quota_reservation: bool = Field(False, alias="ADMIT_QUOTA_RESERVATION")

    # maxScore of the built-in default subjects
    max_score_per_subject: int = Field(MAX_SCORE_PER_SUBJECT, alias="MAX_SCORE_PER_SUBJECT")

    @model_validator(mode="before")
    def _preprocess(cls, values: dict[str, Any]) -> dict[str, Any]:
        raw = values.get("data_dir", values.get("DATA_DIR", _DEFAULT_DATA_DIR))
        values["data_dir"] = Path(raw).expanduser().resolve()
        values.pop("DATA_DIR", None)
        return values

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / self.snapshot_filename

    @property
    def default_policy(self) -> Policy:
        return Policy(
            enable_district_priority=self.enable_district_priority,
            enable_quota_reservation=self.enable_quota_reservation,
        )


settings = Settings()
