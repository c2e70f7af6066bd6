from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class CategoryLimits(BaseModel):
    """Maximum number of records returned per category."""

    commits: int = Field(default=10, ge=0)
    stars: int = Field(default=20, ge=0)
    contributions: int = Field(default=10, ge=0)
    activity: int = Field(default=20, ge=0)
    repos: int = Field(default=10, ge=0)


class GitHubOptions(BaseModel):
    """Per-request view of the account configuration."""

    username: str = ""
    limits: CategoryLimits = Field(default_factory=CategoryLimits)
    repos: list[str] = Field(default_factory=list)
    featured_repos: list[str] = Field(default_factory=list)


def split_csv(value: str) -> list[str]:
    """Split a comma-separated setting, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    # GitHub Configuration
    GITHUB_USERNAME: str = Field(default="", description="Account whose activity is aggregated")
    GITHUB_TOKEN: Optional[str] = Field(default=None, description="GitHub Personal Access Token")
    GITHUB_API_URL: str = Field(default="https://api.github.com")
    GITHUB_CACHE_TTL: int = Field(default=900_000, ge=0, description="Cache TTL in milliseconds")

    # Per-category limits
    GITHUB_LIMIT_COMMITS: int = Field(default=10, ge=0, le=100)
    GITHUB_LIMIT_STARS: int = Field(default=20, ge=0, le=100)
    GITHUB_LIMIT_CONTRIBUTIONS: int = Field(default=10, ge=0, le=100)
    GITHUB_LIMIT_ACTIVITY: int = Field(default=20, ge=0, le=100)
    GITHUB_LIMIT_REPOS: int = Field(default=10, ge=0, le=100)

    # Repository lists ("owner/repo", comma-separated)
    GITHUB_REPOS: str = Field(default="", description="Scope activity to these repositories")
    GITHUB_FEATURED_REPOS: str = Field(default="")

    # Routing
    GITHUB_MOUNT_PATH: str = Field(default="/github")

    # Local proxy (a running instance of this service)
    PROXY_URL: Optional[str] = Field(default=None)
    PROXY_TIMEOUT: float = Field(default=10.0, gt=0)

    HTTP_TIMEOUT: float = Field(default=30.0, gt=0)

    # API Server Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)
    CORS_ORIGINS: str = Field(default="http://localhost:8080,http://localhost:3000")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")
    LOG_DIR: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v_upper

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either 'json' or 'pretty'."""
        allowed_formats = {"json", "pretty"}
        v_lower = v.lower()
        if v_lower not in allowed_formats:
            raise ValueError(f"LOG_FORMAT must be one of {allowed_formats}")
        return v_lower

    @field_validator("GITHUB_TOKEN")
    @classmethod
    def validate_github_token(cls, v: Optional[str]) -> Optional[str]:
        """Validate GitHub token format. An empty value means anonymous access."""
        if not v:
            return None
        if not v.startswith(("ghp_", "github_pat_", "gho_", "ghu_", "ghs_")):
            raise ValueError("GITHUB_TOKEN must be a GitHub token (ghp_, github_pat_, ...)")
        return v

    @field_validator("GITHUB_MOUNT_PATH")
    @classmethod
    def validate_mount_path(cls, v: str) -> str:
        """Normalize mount path to '/name' form."""
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v

    @field_validator("GITHUB_API_URL", "PROXY_URL")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return split_csv(self.CORS_ORIGINS)

    def get_repos_list(self) -> list[str]:
        return split_csv(self.GITHUB_REPOS)

    def get_featured_repos_list(self) -> list[str]:
        return split_csv(self.GITHUB_FEATURED_REPOS)

    def github_options(self) -> GitHubOptions:
        """Build the account options handed to each request."""
        return GitHubOptions(
            username=self.GITHUB_USERNAME.strip(),
            limits=CategoryLimits(
                commits=self.GITHUB_LIMIT_COMMITS,
                stars=self.GITHUB_LIMIT_STARS,
                contributions=self.GITHUB_LIMIT_CONTRIBUTIONS,
                activity=self.GITHUB_LIMIT_ACTIVITY,
                repos=self.GITHUB_LIMIT_REPOS,
            ),
            repos=self.get_repos_list(),
            featured_repos=self.get_featured_repos_list(),
        )


# this will be imported throughout the project
settings = Settings()
