from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_ENABLED: bool = True
    GEMINI_TIMEOUT: float = 30.0

    GOOGLE_CSE_KEY: str = ""
    GOOGLE_CSE_CX: str = ""
    GOOGLE_CSE_VERIFY_SSL: bool = True

    SCRAPE_LIMIT: int = 3
    SCRAPE_TIMEOUT: float = 10.0

    @property
    def GEMINI_ENDPOINT(self) -> str:
        return f"{self.GEMINI_BASE_URL}/v1beta/models/{self.GEMINI_MODEL}:generateContent"
