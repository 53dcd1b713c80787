# chessrules/config.py
from dataclasses import dataclass, field
from typing import Optional
import logging
import os
import tomllib


@dataclass
class EngineConfig:
    validate_on_load: bool = True  # reject unreachable positions in loaded records
    random_seed: Optional[int] = None  # None means seed from system entropy


@dataclass
class ApiConfig:
    app_name: str = "chessrules"


@dataclass
class Config:
    engine: EngineConfig = field(default_factory=EngineConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("engine", "api"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def configure_logging(cfg: Optional[Config] = None):
    """Install a root handler at the configured level. Entry points only."""
    cfg = cfg or CONFIG
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHESSRULES_CONFIG_TOML", "config.toml"))
# allow env override of the log level for quick debugging
if os.environ.get("CHESSRULES_LOG_LEVEL"):
    CONFIG.log_level = os.environ["CHESSRULES_LOG_LEVEL"]
