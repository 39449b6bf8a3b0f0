"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class MiniBankConfig(BaseSettings):
    """Mini bank ledger simulator configuration"""
    
    # Logging configuration
    log_level: str = "ERROR"  # Rejections log at WARNING, mutations at INFO
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Amount handling
    amount_precision: int = 2  # Places amounts are rounded to
    display_precision: int = 2  # Places shown in listings and statements
    
    # Notes the engine writes itself
    initial_note: str = "initial"
    
    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8090
    
    class Config:
        env_prefix = "MINIBANK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = MiniBankConfig()


def get_config() -> MiniBankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> MiniBankConfig:
    """Reload configuration from environment"""
    global config
    config = MiniBankConfig()
    return config
