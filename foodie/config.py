import os
from enum import Enum
from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


PACKAGE_DIR = Path(__file__).resolve().parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    """Settings from init kwargs, ``FOODIE_*`` env vars, then ``settings.json``."""

    model_config = SettingsConfigDict(
        env_prefix="FOODIE_",
        json_file=os.environ.get("FOODIE_SETTINGS_FILE", "settings.json"),
        json_file_encoding="utf-8",
        extra="ignore",
    )

    env: Env = Env.local
    host: str = "127.0.0.1"
    port: int = 3000
    files_directory: Path = Path("files")
    html_dir: Path = PACKAGE_DIR / "templates"
    assets_dir: Path = PACKAGE_DIR / "assets"
    animation_duration: float = 0.3
    gesture_threshold: float = 50
    log_level: str = "INFO"
    terminal_output_capture: bool = False
    terminal_output_ansi_strip: bool = True
    terminal_output_to_html: bool = False

    @property
    def debug(self) -> bool:
        return self.env == Env.local

    @property
    def favorites_file(self) -> Path:
        return self.files_directory / "favorites.json"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
        )
