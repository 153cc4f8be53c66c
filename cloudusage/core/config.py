from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, model_validator


class AWSAccount(BaseModel):
    """Friendly name for a usage account id, used for display only."""
    id: str
    name: str


class Settings(BaseSettings):
    """
    Main configuration for the usage normalizer.
    Uses Pydantic-Settings for environment variable parsing from .env.
    """
    APP_NAME: str = "cloudusage"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    TESTING: bool = False

    CLOUD_PROVIDER: str = "AWS"

    # Average server CPU utilization in the 2020 baseline year. Burstable
    # instance baselines are scaled against it to get an effective vCPU count.
    REFERENCE_CPU_UTILIZATION: float = 0.5

    # Applied when no service-specific replication rule matches
    DEFAULT_REPLICATION_FACTOR: float = 1.0

    # Account directory, e.g. AWS_ACCOUNTS='[{"id": "123456789012", "name": "prod"}]'
    AWS_ACCOUNTS: list[AWSAccount] = []

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_estimation_constants(self) -> 'Settings':
        """Fail-closed: estimation constants must keep vCPU-hours finite and factors >= 1."""
        if not 0 < self.REFERENCE_CPU_UTILIZATION <= 1:
            raise ValueError(
                f"REFERENCE_CPU_UTILIZATION must be in (0, 1], got {self.REFERENCE_CPU_UTILIZATION}."
            )
        if self.DEFAULT_REPLICATION_FACTOR < 1:
            raise ValueError(
                f"DEFAULT_REPLICATION_FACTOR must be at least 1, got {self.DEFAULT_REPLICATION_FACTOR}."
            )
        return self


@lru_cache
def get_settings():
    """Returns a singleton instance of the application settings."""
    return Settings()
