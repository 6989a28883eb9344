from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/fridge_chef"
    anthropic_api_key: str = ""

    vision_model: str = "claude-sonnet-4-5-20250929"  # Ingredient detection (multimodal)
    recipe_model: str = "claude-haiku-4-5-20251001"  # Recipe generation (text only)

    vision_max_tokens: int = 500
    recipe_max_tokens: int = 4096

    # Anthropic API timeout settings (seconds)
    anthropic_timeout: int = 120
    anthropic_connect_timeout: int = 10

    # Upload limits
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MB
    max_image_width: int = 1920

    log_level: str = "INFO"

    # Auth settings
    session_cookie_name: str = "fridge_chef_session"
    session_max_age: int = 86400 * 30  # 30 days
    session_cookie_secure: bool = False  # True in production

    class Config:
        env_file = ".env"


settings = Settings()
