from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROVIDER_BASE_URL: str = ""
    PROVIDER_AUTH_USER: str = ""
    PROVIDER_AUTH_PASSWORD: str = ""
    PROVIDER_TIMEOUT_SECONDS: float = 30.0

    SENDING_SYSTEM: str = "booking-adapter"
    RECEIVING_SYSTEM: str = "scheduling-provider"

    ELECTRICITY_JOB_TYPE_CODE_CREDIT: str = ""
    ELECTRICITY_JOB_TYPE_CODE_PREPAYMENT: str = ""
    GAS_JOB_TYPE_CODE_CREDIT: str = ""
    GAS_JOB_TYPE_CODE_PREPAYMENT: str = ""

    USE_HEALTHCHECK: bool = False
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
