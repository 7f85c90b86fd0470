from pydantic_settings import BaseSettings
from pydantic import EmailStr
from typing import Optional

class Settings(BaseSettings):
    # 1️⃣ Database
    DATABASE_URL: str
    DATABASE_SSL: bool = False
    DATABASE_ECHO: bool = False

    # 2️⃣ Secrets
    SECRET_KEY: str

    # 3️⃣ Server
    ENVIRONMENT: str = "development"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # 4️⃣ Security
    FRONTEND_ORIGIN: str = "https://yourdomain.com"
    CONTENT_SECURITY_POLICY: str = (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; img-src 'self' data:; connect-src 'self'"
    )
    RATE_LIMIT_MAX: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_TRUST_FORWARDED: bool = False

    # 5️⃣ Contact form
    CONTACT_MESSAGE_MAX_LENGTH: int = 5000

    # 6️⃣ Email config (contact notifications)
    MAIL_ENABLED: bool = False
    MAIL_USERNAME: Optional[str] = None
    MAIL_PASSWORD: Optional[str] = None
    MAIL_FROM: Optional[EmailStr] = None
    MAIL_PORT: int = 587
    MAIL_SERVER: Optional[str] = None
    MAIL_FROM_NAME: str = "Portfolio"
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False
    USE_CREDENTIALS: bool = True

    OWNER_EMAIL: Optional[EmailStr] = None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # optional, for safety

settings = Settings()
