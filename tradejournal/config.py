"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

from tradejournal.analytics.defaults import StatsConfig

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'tradejournal.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Trade store
    trades_page_size: int = 500

    # Statistics
    default_risk_pct: float = 0.5
    default_rr: float = 2.0
    be_partials_count_as_win: bool = True

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}

    def stats_config(self) -> StatsConfig:
        return StatsConfig(
            default_risk_pct=self.default_risk_pct,
            default_rr=self.default_rr,
            be_partials_count_as_win=self.be_partials_count_as_win,
        )


settings = Settings()
