"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProverSettings(BaseSettings):
    """Proving backend endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="PROVER_")

    url: str = "http://localhost:6300"
    prove_path: str = "/prove"
    timeout_seconds: float = 120.0
    max_retries: int = 3

    @property
    def endpoint(self) -> str:
        """Full URL of the prove endpoint."""
        return self.url.rstrip("/") + "/" + self.prove_path.lstrip("/")


class CircuitSettings(BaseSettings):
    """
    Eligibility circuit parameters.

    `value_bits` fixes the numeric domain shared by the commitment range
    check and the circuit: values are unsigned integers below 2**value_bits.
    """

    model_config = SettingsConfigDict(env_prefix="CIRCUIT_")

    name: str = "SkillCircuit"
    value_bits: int = 32
    key: SecretStr = SecretStr("zkjobs-dev-circuit-key-change-me")

    @field_validator("value_bits")
    @classmethod
    def whole_bytes(cls, v: int) -> int:
        """Value width must be a positive whole number of bytes."""
        if v <= 0 or v % 8 != 0 or v > 256:
            raise ValueError("value_bits must be a multiple of 8 between 8 and 256")
        return v

    @property
    def max_value(self) -> int:
        """Largest value representable in the circuit domain."""
        return (1 << self.value_bits) - 1


class LedgerSettings(BaseSettings):
    """Ledger network configuration."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    network_id: str = "TestNet"
    contract_address: str = ""


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class ServicePorts(BaseSettings):
    """Service port configuration."""

    job_board: int = Field(default=8010, alias="JOB_BOARD_PORT")
    proof_server: int = Field(default=6300, alias="PROOF_SERVER_PORT")


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Components take the sub-settings they need as constructor arguments;
    call `get_settings()` at the edge of the program to build them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    # Service ports
    ports: ServicePorts = Field(default_factory=ServicePorts)

    # Protocol
    prover: ProverSettings = Field(default_factory=ProverSettings)
    circuit: CircuitSettings = Field(default_factory=CircuitSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings.
    """
    return Settings()
