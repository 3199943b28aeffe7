"""Runtime configuration for Better Warps."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="BETTER_WARPS_", env_file=".env", extra="ignore")

    app_name: str = "better-warps"
    log_level: str = "INFO"
    run_dir: Path = Field(default=Path("."), description="Server run directory; the warp file lives below it.")
    warps_file: Path = Field(
        default=Path("config") / "betterwarps.json",
        description="Warp document path, relative to run_dir unless absolute.",
    )
    persist_on_mutation: bool = True
    permission_prefix: str = "simplybetter.warps"
    default_op_level: int = 1
    console_op_level: int = 4
    minecraft_adapter: str = Field(default="echo", description="Teleport command backend: echo or minescript.")
    minescript_command_prefix: str = "/"

    @property
    def warps_path(self) -> Path:
        return self.warps_file if self.warps_file.is_absolute() else self.run_dir / self.warps_file


settings = Settings()
