import yaml
import os
from typing import Optional, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./ytheys.db"


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class MetadataConfig(BaseModel):
    """
    Where repository metadata comes from.

    "github" calls the GitHub REST API directly; "overview_api" calls
    GET {base_url}/api/githubOverview?repo=<repo>.
    """
    source: Literal["github", "overview_api"] = "github"
    base_url: str = "http://localhost:8080"
    github_api_url: str = "https://api.github.com"
    github_token: Optional[str] = None
    request_timeout_seconds: float = 10.0
    max_workers: int = Field(default=16, ge=1)


class SeedConfig(BaseModel):
    # Relative paths resolve against the project root
    path: str = "data/agencies.json"


class AuthConfig(BaseModel):
    """
    Sign-in flow settings.

    bypass_sign_in admits every request to the gated views and sends /auth
    straight to /home. Keep it off outside local development.
    """
    bypass_sign_in: bool = False
    session_ttl_hours: int = Field(default=24, ge=1)
    max_failed_attempts: int = Field(default=5, ge=1)
    lockout_minutes: int = Field(default=15, ge=1)
    cookie_name: str = "session_token"
    cookie_secure: bool = False


class ScoringConfig(BaseModel):
    match_limit: int = Field(default=3, ge=1)
    debounce_seconds: float = Field(default=0.3, ge=0)
    page_size: int = Field(default=20, ge=1, le=200)


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    seeds: SeedConfig = Field(default_factory=SeedConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _section(data: dict, name: str) -> dict:
    if name not in data or data[name] is None:
        data[name] = {}
    return data[name]


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        _section(data, 'database')['url'] = env_db_url

    # Web server overrides
    if os.environ.get("WEB_HOST"):
        _section(data, 'web')['host'] = os.environ["WEB_HOST"]
    if os.environ.get("WEB_PORT"):
        _section(data, 'web')['port'] = int(os.environ["WEB_PORT"])

    # Metadata source overrides
    if os.environ.get("METADATA_BASE_URL"):
        _section(data, 'metadata')['base_url'] = os.environ["METADATA_BASE_URL"]
    if os.environ.get("GITHUB_TOKEN"):
        _section(data, 'metadata')['github_token'] = os.environ["GITHUB_TOKEN"]

    if os.environ.get("SEED_DATA_PATH"):
        _section(data, 'seeds')['path'] = os.environ["SEED_DATA_PATH"]

    env_bypass = os.environ.get("AUTH_BYPASS_SIGN_IN")
    if env_bypass is not None:
        _section(data, 'auth')['bypass_sign_in'] = _truthy(env_bypass)

    return AppConfig(**data)
