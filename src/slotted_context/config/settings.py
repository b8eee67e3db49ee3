"""Configuration management for the context store.

This module handles configuration for the context store, including the
persistence backend selection, Supabase connection details and logging.
"""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Configuration settings for the context store."""
    
    # Persistence configuration
    storage_backend: Literal["memory", "file", "supabase"] = "file"
    storage_key: str = "slotted_context"
    storage_path: str = "./.slotted/storage.json"
    storage_quota_bytes: Optional[int] = None
    
    # Supabase configuration
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    supabase_timeout: int = 10
    supabase_table: str = "context_snapshots"
    
    # Retry configuration
    max_retries: int = 3
    retry_delay: float = 0.1
    
    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True
    log_file: Optional[str] = None
    
    @property
    def supabase_configured(self) -> bool:
        """Return True when both Supabase URL and service key are set."""
        return bool(self.supabase_url and self.supabase_service_key)
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

# Global settings instance
settings = Settings()
