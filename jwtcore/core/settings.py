"""Parser settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LEEWAY_SECONDS_DEFAULT = 0


class ParserSettings(BaseSettings):
    """Token parser configuration."""

    model_config = SettingsConfigDict(env_prefix="JWT_")

    valid_methods: str = ""
    use_json_number: bool = False
    leeway_seconds: int = Field(default=LEEWAY_SECONDS_DEFAULT, ge=0)

    def get_valid_method_list(self) -> list[str]:
        """Parse comma-separated allowed algorithm names."""
        if not self.valid_methods:
            return []
        return [m.strip() for m in self.valid_methods.split(",") if m.strip()]
