from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings
from enum import Enum

class BaseConfig(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name":True 
    }

class LogLevel(str, Enum):
    DEBUG = "debug"  
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

class CompressionType(str, Enum):
    GZIP = "gz"
    BZIP2 = "bz2"
    ZIP = "zip"

class AppSettings(BaseSettings):
    app_name: str = Field(
        default="Clip Review",
        min_length=1,
        max_length=100,
        alias="APP_NAME" 
    )
    app_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        alias="APP_PORT" 
    )
    
    app_host: str = Field(default="0.0.0.0")
    app_reload: bool = Field(default=False)
    app_log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    log_file: str = Field(default="logs/app.log")
    log_rotation: str = Field(default="1 day")
    log_compression: CompressionType = Field(default=CompressionType.GZIP)
    state_file: str = Field(default="data/state.json", alias="STATE_FILE")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")
    
    model_config = BaseConfig.model_config


class TelegramSettings(BaseSettings):
    bot_token: str = Field(..., alias="TELEGRAM_BOT_TOKEN")
    monitored_chat_id: int = Field(..., alias="MONITORED_CHAT_ID")
    guild_chat_id: int = Field(..., alias="GUILD_CHAT_ID")
    ban_enabled: bool = Field(default=True, alias="BAN_ENABLED")

    model_config = BaseConfig.model_config


@lru_cache
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache
def get_telegram_settings() -> TelegramSettings:
    return TelegramSettings()
