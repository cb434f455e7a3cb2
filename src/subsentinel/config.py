from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True
    cors_origins: list[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./subsentinel.db"
    db_echo: bool = False
    seed_on_startup: bool = True

    # JWT
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "subsentinel-api"
    jwt_user_audience: str = "subsentinel-user"
    jwt_admin_audience: str = "subsentinel-admin"
    user_token_expire_days: int = 7
    admin_token_expire_hours: int = 24

    # Default admin account
    admin_username: str = "admin"
    admin_password: str = "changeme"

    # SMS verification
    otp_provider: Literal["mock", "twilio"] = "mock"
    mock_otp_code: str = "123456"
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_verify_service_sid: str = ""

    # Identity provider
    identity_provider: Literal["mock", "firebase"] = "firebase"
    firebase_project_id: str = ""
    firebase_client_email: str = ""
    firebase_private_key: str = ""

    # Payments
    payment_provider: Literal["mock", "dodo"] = "dodo"
    dodo_payments_api_key: str = ""
    dodo_payments_environment: Literal["test_mode", "live_mode"] = "test_mode"
    checkout_return_url: str = "subsentinel://payment-success"

    # Uploads
    upload_dir: str = "./uploads"
    public_base_url: str = "http://localhost:3000"
    upload_max_size_mb: int = 5

    # Dashboard
    summary_currency: str = "USD"
    renewal_window_days: int = 7


settings = Settings()
