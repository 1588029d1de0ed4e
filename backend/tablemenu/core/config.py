from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    ENV: str = "prod"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str

    JWT_SECRET: str
    JWT_ACCESS_MINUTES: int = 60 * 24 * 7

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT_SECONDS: int = 30
    DB_POOL_RECYCLE_SECONDS: int = 1800

    ALLOWED_HOSTS: str = "localhost,127.0.0.1"
    SECURITY_HEADERS_ENABLED: bool = True

    # Admin access
    ADMIN_ROLE_NAME: str = "admin"
    BOOTSTRAP_ADMIN_USERNAME: str | None = None
    BOOTSTRAP_ADMIN_PASSWORD: str | None = None

    MENU_ITEMS_MAX_PAGE_SIZE: int = 100

    # Image hosting
    IMAGE_PROVIDER: str = "imagekit"  # imagekit|none
    IMAGEKIT_PUBLIC_KEY: str | None = None
    IMAGEKIT_PRIVATE_KEY: str | None = None
    IMAGEKIT_URL_ENDPOINT: str | None = None
    IMAGEKIT_DEFAULT_FOLDER: str = "image_menus_sndr"
    IMAGE_UPLOAD_MAX_SIZE_MB: int = 5
    IMAGE_UPLOAD_ALLOWED_EXT: str = "jpg,jpeg,png,webp,gif"
    IMAGE_AUTH_TTL_SECONDS: int = 1800

settings = Settings()
