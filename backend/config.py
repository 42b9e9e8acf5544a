"""
Configuration management for Profile Directory.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    oauth_redirect_url: str = "http://localhost:8000/auth/callback"
    oauth_timeout: float = 10.0
    oauth_state_ttl: int = 600  # seconds

    # Sessions
    session_ttl_hours: int = 168
    admin_emails: list[str] = []

    # Mentor pseudo-identities (no login)
    mentor_names: list[str] = [
        "مریم احمدی",
        "علی رضایی",
        "سارا کریمی",
        "محمد حسینی",
    ]

    # Avatars: participant name -> photo shipped with the frontend
    participant_photos: dict[str, str] = {
        "امیرحسین شریفی نژاد": "/picture/participants/amirhossein sharif.jpeg",
        "امید نائیج نژاد": "/picture/participants/omid naeijnejad.jpeg",
        "علیرضا فیض آبادی فراهانی": "/picture/participants/alireza feyzabadi.jpeg",
        "امینه علیخانی": "/picture/participants/amine.jpeg",
        "پارمیس سبکتکین": "/picture/participants/parmis saboktakin.jpeg",
        "پانته آ سبکتکین": "/picture/participants/pantea saboktakin.jpeg",
        "میلاد حسینی": "/picture/participants/milad.jpeg",
        "محمد حسن کریمی": "/picture/participants/hosein karimi.jpeg",
        "پرهام زیلوچیان": "/picture/participants/parham.jpeg",
    }

    # File storage
    media_dir: str = "media"
    media_url: str = "/media"
    max_image_size: int = 5 * 1024 * 1024  # 5 MB

    # Server
    cors_origins: list[str] = ["http://localhost:5173"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
