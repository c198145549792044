from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "Specialistly")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "specialistdb")
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))

    # JWT Auth
    SECRET_KEY: str = os.getenv("JWT_SECRET", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # Next.js frontend
        "https://specialistly.com",
        "https://www.specialistly.com",
    ]

    # Tenant routing
    RESERVED_SUBDOMAINS: List[str] = ["www", "api", "admin", "mail", "ftp", "localhost", "specialistly"]
    TENANT_ROUTE_PREFIX: str = "/specialist"
    TENANT_EXCLUDED_PATHS: List[str] = [
        "/api",
        "/_next/static",
        "/_next/image",
        "/favicon.ico",
        "/sitemap.xml",
        "/robots.txt",
    ]

    # Marketplace
    DEFAULT_COMMISSION_PERCENTAGE: float = float(os.getenv("DEFAULT_COMMISSION_PERCENTAGE", "15"))

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
