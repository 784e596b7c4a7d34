"""
code-stopper configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8100
    debug: bool = True

    # Code stopper
    stopper_enabled: bool = True
    banner_timeout: float = 3.0  # seconds

    # Error explanations (OpenAI-compatible chat completions)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    explain_model: str = "gpt-4o-mini"
    explain_timeout: float = 30.0

    class Config:
        env_file = ".env"
        env_prefix = "CODE_STOPPER_"

settings = Settings()
