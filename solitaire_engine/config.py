"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel

from solitaire_engine.logging.game_logger import GameLogConfig


class EngineConfig(BaseModel):
    """Engine configuration."""

    # One of: klondike, freecell, spider_easy, spider_hard, yukon
    variant: str = "klondike"
    # Shuffle seed (None draws a fresh one per game)
    seed: int | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hidden: bool = False


class Config(BaseModel):
    """Root configuration."""

    engine: EngineConfig = EngineConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
