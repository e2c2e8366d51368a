from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    APP_NAME: str = "SurveyCollector"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "change_me_please"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AUTH_COOKIE_NAME: str = "token"

    # SQLite by default; any SQLAlchemy URL works (postgresql+psycopg://...)
    DATABASE_URL: str = "sqlite+pysqlite:///./survey.db"
    # Upper bound for lock waits / statement time inside one reconciliation
    DB_TX_TIMEOUT_SECONDS: int = 30

    BACKEND_CORS_ORIGINS: str = "http://localhost:3000"
    SEED_QUESTIONS_ON_STARTUP: bool = True

settings = Settings()
