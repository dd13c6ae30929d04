from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Takeoff Estimator"
    LOG_LEVEL: str = "INFO"

    # Stock-cut ranking: candidates within this many dollars are a tie
    TAKEOFF_TIE_EPSILON: float = 0.01

    # Composite decking "good utilization" band (stock length / run length)
    COMPOSITE_UTILIZATION_MIN: float = 1.8
    COMPOSITE_UTILIZATION_MAX: float = 2.2

    # Optional JSON file of supplier price overrides (see material_lookup)
    PRICE_OVERRIDES_PATH: str = ""

    class Config:
        env_file = ".env"


settings = Settings()
