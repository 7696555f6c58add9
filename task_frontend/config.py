# task_frontend/config.py
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
    # Backend
    API_BASE_URL: str = "http://localhost:4000"
    TASKS_PATH: str = "/api/tasks"
    EXAMPLE_CASE_PATH: str = "/get-example-case"

    # App
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 3100
    DEVELOPMENT_MODE: bool = False
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "HMCTS Task Management System"

    class Config:
        env_file = ".env"
        extra = "ignore"

    # -------------------------------------------------
    # URL helpers
    # -------------------------------------------------
    def backend_url(self, path: str) -> str:
        return f"{self.API_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    @property
    def tasks_url(self) -> str:
        return self.backend_url(self.TASKS_PATH).rstrip("/")

    @property
    def example_case_url(self) -> str:
        return self.backend_url(self.EXAMPLE_CASE_PATH)


# -------------------------------------------------
# Initialize settings
# -------------------------------------------------
settings = Settings()
