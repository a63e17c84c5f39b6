from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", protected_namespaces=("settings_",))

    app_name: str = "AI Physio"
    env: str = "dev"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    log_file: str | None = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    database_url: str = "sqlite:///./ai_physio.db"
    seed_demo_data: bool = True

    jwt_secret: str = "CHANGE_ME"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30

    # MVP convenience: map a missing / "mock-token" bearer to the seeded demo user.
    allow_demo_user: bool = False

    frontend_origin: str = "http://localhost:3000"

    # OpenAI-compatible chat completions provider. All three are required for /ai/chat.
    model_base_url: str | None = None
    model_api_key: str | None = None
    model_name: str | None = None
    model_timeout_seconds: float = 60.0

    # How many recent session logs feed the prompt and the red-flag gate.
    recent_log_limit: int = 3


settings = Settings()
