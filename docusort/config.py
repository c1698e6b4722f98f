from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docusort.constants import (
  CLASSIFICATION_WINDOW_SIZE,
  DEFAULT_JPEG_QUALITY,
  DEFAULT_RENDER_SCALE,
  HISTORY_LIMIT,
)

# The repository root .env wins over the working directory the server starts in.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings(BaseSettings):
  model_config = SettingsConfigDict(case_sensitive=False, populate_by_name=True, extra="ignore")

  # Classification oracle
  azure_openai_api_key: str | None = Field(default=None, alias="AZURE_OPENAI_API_KEY")
  azure_openai_endpoint: str = Field(default="", alias="AZURE_OPENAI_ENDPOINT")
  azure_openai_api_version: str = Field(default="2024-12-01-preview", alias="AZURE_OPENAI_API_VERSION")
  azure_openai_deployment_name: str | None = Field(default=None, alias="AZURE_OPENAI_DEPLOYMENT_NAME")
  azure_openai_vision_model: str | None = Field(default=None, alias="AZURE_OPENAI_VISION_MODEL")
  classification_timeout_seconds: float = Field(default=60.0, alias="CLASSIFICATION_TIMEOUT_SECONDS")
  classification_window_size: int = Field(default=CLASSIFICATION_WINDOW_SIZE, alias="CLASSIFICATION_WINDOW_SIZE")

  # Rendering
  render_scale: float = Field(default=DEFAULT_RENDER_SCALE, alias="RENDER_SCALE")
  jpeg_quality: int = Field(default=DEFAULT_JPEG_QUALITY, alias="JPEG_QUALITY")

  # History ledger
  data_dir: str = Field(default="docusort_data", alias="DATA_DIR")
  history_limit: int = Field(default=HISTORY_LIMIT, alias="HISTORY_LIMIT")

  @field_validator("classification_window_size", "history_limit")
  @classmethod
  def _at_least_one(cls, value: int) -> int:
    if value < 1:
      raise ValueError("must be >= 1")
    return value

  @field_validator("jpeg_quality")
  @classmethod
  def _jpeg_quality_range(cls, value: int) -> int:
    if not 1 <= value <= 100:
      raise ValueError("must be between 1 and 100")
    return value

  @field_validator("render_scale", "classification_timeout_seconds")
  @classmethod
  def _positive(cls, value: float) -> float:
    if value <= 0:
      raise ValueError("must be > 0")
    return value

  def ensure_endpoint(self) -> str:
    endpoint = (self.azure_openai_endpoint or "").strip()
    if not endpoint:
      return ""
    return endpoint.rstrip("/") + "/"

  @property
  def classifier_model(self) -> str | None:
    """Vision model name, falling back to the deployment name."""
    return self.azure_openai_vision_model or self.azure_openai_deployment_name

  @property
  def data_path(self) -> Path:
    """``DATA_DIR`` resolved against the repository root when relative."""
    path = Path(self.data_dir).expanduser()
    return path if path.is_absolute() else ROOT_DIR / path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]
