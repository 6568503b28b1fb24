from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    ghl_api_key: str = ""
    ghl_location_id: str = ""
    ghl_base_url: str = "https://rest.gohighlevel.com/v1"
    anthropic_api_key: str = ""
    environment: str = "development"
    port: int = 8080
    log_level: str = "INFO"
    log_dir: str = ""
    snapshot_dir: str = ""
    snapshot_history_size: int = 3
    placeholder_phone: str = "+15555550100"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @model_validator(mode="after")
    def _require_crm_credentials_in_production(self) -> "Settings":
        if self.is_production and not (self.ghl_api_key and self.ghl_location_id):
            raise ValueError(
                "GHL_API_KEY and GHL_LOCATION_ID are required when ENVIRONMENT=production"
            )
        return self
