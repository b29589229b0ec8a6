from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import os

class DatabaseConfig(BaseSettings):
    # Prefixed so the app's HOST/PORT never leak into the database settings
    model_config = SettingsConfigDict(env_prefix='POSTGRES_')

    DSN: Optional[str] = os.getenv('DATABASE_URL') or None
    HOST: str = os.getenv('POSTGRES_HOST', 'localhost')
    PORT: int = int(os.getenv('POSTGRES_PORT', 5432))
    DATABASE: str = os.getenv('POSTGRES_DB', 'reading_challenge')
    USER: str = os.getenv('POSTGRES_USER', 'postgres')
    PASSWORD: str = os.getenv('POSTGRES_PASSWORD', 'postgres')
    MIN_POOL_SIZE: int = int(os.getenv('DB_MIN_POOL_SIZE', 1))
    MAX_POOL_SIZE: int = int(os.getenv('DB_MAX_POOL_SIZE', 10))
    COMMAND_TIMEOUT: float = float(os.getenv('DB_COMMAND_TIMEOUT', 10))

database = DatabaseConfig()

class AppConfig(BaseSettings):
    title: str = os.getenv('APP_TITLE', 'Reading Challenge API')
    log_level: str = os.getenv('LOG_LEVEL', 'INFO')
    cors_origins: str = os.getenv('CORS_ORIGINS', '*')
    host: str = os.getenv('HOST', '0.0.0.0')
    port: int = int(os.getenv('PORT', 5001))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]

settings = AppConfig()
