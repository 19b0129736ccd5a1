# taskmaster/config.py
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# -------------------------------------------------
# Load environment variables
# -------------------------------------------------
load_dotenv()


# -------------------------------------------------
# Settings
# -------------------------------------------------
class Settings(BaseSettings):
    # App
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Database
    DB_ENV: str = "local"            # local | docker
    DB_HOST: str | None = None
    DB_PORT: int = 5432
    DB_NAME: str = "taskmaster"
    DB_USER: str = "taskmaster"
    DB_PASSWORD: str = "taskmaster"
    DATABASE_URL: str | None = None  # full URL wins over the parts above
    DB_ECHO: bool = False
    DB_CREATE_SCHEMA: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"

    # -------------------------------------------------
    # DB helpers
    # -------------------------------------------------
    def resolve_db_host(self) -> str:
        if self.DB_HOST:
            return self.DB_HOST
        if self.DB_ENV.lower() == "local":
            return "127.0.0.1"
        # Docker default
        return "app_postgres"

    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://"
            f"{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.resolve_db_host()}:{self.DB_PORT}/{self.DB_NAME}"
        )


# -------------------------------------------------
# Initialize settings
# -------------------------------------------------
settings = Settings()
