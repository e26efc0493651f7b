import os
from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", 3600))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Object storage
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "posts")

    # Image intake
    IMAGE_MAX_BYTES = int(os.getenv("IMAGE_MAX_BYTES", 500 * 1024))
    IMAGE_MAX_DIMENSION = int(os.getenv("IMAGE_MAX_DIMENSION", 1920))
    IMAGE_DELIVERY_TRANSFORM = {"width": 800, "format": "webp", "quality": 80}

    FEED_PAGE_SIZE = int(os.getenv("FEED_PAGE_SIZE", 20))
    NOTIFICATION_LIMIT = 50


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///amigo-dev.db")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    PUBLIC_BASE_URL = "http://testserver"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
