# config.py - runtime settings for the supermarket backend
# values come from SUPERMARKET_* environment variables or a local .env file

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SUPERMARKET_", env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///supermarket.db"
    SECRET_KEY: str = "supermarket-dev-secret-key-change-me"

    # bearer tokens
    JWT_SECRET: str = "supermarket-dev-jwt-secret-change-me-please"
    JWT_ISSUER: str = "SuperMarketSystem"
    JWT_AUDIENCE: str = "SuperMarketSystem.Client"

    # uploaded images are written below UPLOAD_FOLDER and served under UPLOAD_URL_PATH
    UPLOAD_FOLDER: str = "uploads/Images"
    UPLOAD_URL_PATH: str = "/Images"
    MAX_CONTENT_LENGTH: int = 16 * 1024 * 1024

    def to_flask_config(self) -> dict:
        return {
            "SQLALCHEMY_DATABASE_URI": self.DATABASE_URL,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SECRET_KEY": self.SECRET_KEY,
            "JWT_SECRET": self.JWT_SECRET,
            "JWT_ISSUER": self.JWT_ISSUER,
            "JWT_AUDIENCE": self.JWT_AUDIENCE,
            "UPLOAD_FOLDER": self.UPLOAD_FOLDER,
            "UPLOAD_URL_PATH": self.UPLOAD_URL_PATH.rstrip("/"),
            "MAX_CONTENT_LENGTH": self.MAX_CONTENT_LENGTH,
        }
