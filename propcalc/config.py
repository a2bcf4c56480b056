from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROPCALC_"}

    # Global assumptions (percent)
    default_transfer_tax_rate: float = 4.0
    default_legal_fee_rate: float = 0.5
    default_inflation_rate: float = 3.5
    default_benchmark_rate: float = 0.0

    # Projection horizons
    roi_table_horizon_years: int = 5
    chart_horizon_options: list[int] = [5, 10, 20, 30]
    default_chart_years: int = 20

    # Sharing
    share_url_param: str = "s"

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
