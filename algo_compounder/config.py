"""Configuration management using Pydantic Settings"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from algo_compounder.domain.models import CompoundModelCoefs


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Algod node
    algorand_data: str | None = None  # node data dir holding algod.net and algod.token
    algod_address: str | None = None
    algod_token: str | None = None

    # Account
    account_mnemonic: SecretStr | None = None

    # Interest model
    interest_years: float = Field(1.0, gt=0)
    interest_rate: float = Field(0.069, gt=-1)
    interest_avg_fees: float = Field(0.001, ge=0)  # Algos per collection
    default_wait_seconds: float = Field(86400.0, gt=0)  # used when no optimum is found

    # Transactions
    confirmation_timeout_rounds: int = 10
    transaction_fee_microalgos: int = 1000
    transaction_validity_rounds: int = 1000

    # Service
    service_name: str = "algo-compounder"
    log_level: str = "INFO"
    metrics_port: int | None = None

    # HTTP Client
    http_timeout_seconds: float = 5.0

    def compound_coefs(self, balance: float) -> CompoundModelCoefs:
        """Model coefficients for the observed balance"""
        return CompoundModelCoefs(
            years=self.interest_years,
            rate=self.interest_rate,
            avg_fees=self.interest_avg_fees,
            initial_principal=balance,
        )


settings = Settings()
