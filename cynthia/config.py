from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from cynthia import __version__

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Cynthia"
    app_version: str = __version__
    debug: bool = False
    environment: str = "development"

    # Site layout
    site_root: Path = Path(".")
    files_dir: str = "cynthiaFiles"
    plugins_dir: str = "plugins"
    client_script_path: str = "src/client.js"

    # Plugin execution
    node_binary: str = "node"
    plugin_timeout_seconds: float = 30.0
    trace_plugin_commands: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    # Server
    host: str = "localhost"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_prefix="CYNTHIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def files_path(self) -> Path:
        return self.site_root / self.files_dir

    @property
    def styles_path(self) -> Path:
        return self.files_path / "styles"

    @property
    def templates_path(self) -> Path:
        return self.files_path / "templates"

    @property
    def modes_path(self) -> Path:
        return self.files_path / "modes"

    @property
    def pages_path(self) -> Path:
        return self.files_path / "pages"

    @property
    def published_path(self) -> Path:
        return self.files_path / "published.jsonc"

    @property
    def plugins_path(self) -> Path:
        return self.site_root / self.plugins_dir

    @property
    def client_script(self) -> Path:
        return self.site_root / self.client_script_path


settings = Settings()
