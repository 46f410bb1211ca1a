from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PAYOFF_"}

    # App
    app_title: str = "Mortgage Payoff"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Impact analysis regenerates O(n^2) schedules, keep n small
    max_lump_sums: int = 50

    # Used when a request omits the payment day
    default_payment_day: int = 1


settings = Settings()
