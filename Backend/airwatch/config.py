"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Core
    environment: str = "development"  # development | production

    # CORS Configuration
    cors_origins: str = "http://localhost:8080,http://localhost:3000,http://localhost:5173,http://127.0.0.1:8080,http://127.0.0.1:3000"  # Comma-separated list, override via CORS_ORIGINS env var

    # Simulation
    random_seed: Optional[int] = None  # Fixed seed makes every facade response reproducible
    latency_scale: float = 1.0  # Multiplier on the artificial per-endpoint delay, 0 disables it
    latency_jitter: float = 0.2  # +/- fraction applied to each nominal delay

    # Alerts
    alert_threshold: int = 100  # Samples with AQI above this raise an alert

    # Forecasts
    forecast_horizon_hours: int = 24  # Horizon for the station forecast endpoint
    prediction_days: int = 7  # Default horizon for the advanced prediction endpoint

    # Application
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
