from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 파일 읽기 최대 크기 (8 MB)
DEFAULT_MAX_FILE_BYTES = 8 * 1024 * 1024
DEFAULT_CONTROLLER_SUFFIX = "Controller.java"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    doc_output_dir: Path = Field(default=Path("./out"), alias="DOC_OUTPUT_DIR")

    max_file_bytes: int = Field(default=DEFAULT_MAX_FILE_BYTES, alias="ENDPOINT_MAX_FILE_BYTES")
    controller_suffix: str = Field(default=DEFAULT_CONTROLLER_SUFFIX, alias="ENDPOINT_CONTROLLER_SUFFIX")
    strict: bool = Field(default=True, alias="ENDPOINT_STRICT")
    jobs: int = Field(default=1, alias="ENDPOINT_JOBS")

    log_level: str = Field(default="WARNING", alias="ENDPOINT_LOG_LEVEL")


settings = Settings()


@dataclass(frozen=True)
class ScanConfig:
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    controller_suffix: str = DEFAULT_CONTROLLER_SUFFIX
    hidden_prefix: str = "."
    strict: bool = True          # False면 미등록 어노테이션을 기록만 하고 계속 진행
    follow_symlinks: bool = False
    jobs: int = 1

    @classmethod
    def from_settings(cls, s: Settings | None = None, **overrides) -> "ScanConfig":
        s = s or settings
        values = {
            "max_file_bytes": s.max_file_bytes,
            "controller_suffix": s.controller_suffix,
            "strict": s.strict,
            "jobs": s.jobs,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
