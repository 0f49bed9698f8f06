"""Configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_IGNORABLE_PATHS = ["/_dusk/*"]

# The provider rejects custom rule expressions longer than this.
HARD_EXPRESSION_LIMIT = 4096
DEFAULT_BUDGET = 4000
DEFAULT_MAX_ITERATIONS = 25


class ApiSettings(BaseModel):
    """Cloudflare API credentials and transport settings."""

    token: str | None = None
    zone_id: str | None = None
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = Field(default=30.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay: int = Field(default=1000, ge=0)  # milliseconds


class WafSettings(BaseModel):
    """Firewall rule generation and sync settings."""

    rule_identifier: str = "routewall-waf-rule"
    rule_description: str = "Valid application routes"
    rule_action: str = "block"
    budget: int = Field(default=DEFAULT_BUDGET, gt=0)
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, ge=0)
    field: str = "http.request.uri.path"
    ignorable_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORABLE_PATHS))

    @field_validator("budget")
    @classmethod
    def _budget_below_hard_limit(cls, value: int) -> int:
        if value >= HARD_EXPRESSION_LIMIT:
            raise ValueError(
                f"budget must be below the {HARD_EXPRESSION_LIMIT} character expression limit"
            )
        return value


class AppSettings(BaseModel):
    """Application being protected."""

    url: str | None = None
    public_dir: str | None = None


class Settings(BaseModel):
    """Top-level routewall settings."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    waf: WafSettings = Field(default_factory=WafSettings)
    app: AppSettings = Field(default_factory=AppSettings)
