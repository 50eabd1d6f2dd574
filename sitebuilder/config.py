from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

# Database configuration
DB_HOST = os.getenv("MYSQL_HOST", "db")
DB_USER = os.getenv("MYSQL_USER", "user")
DB_PASSWORD = os.getenv("MYSQL_PASSWORD", "123456")
DB_NAME = os.getenv("MYSQL_DB", "sitebuilder")
DB_PORT = os.getenv("MYSQL_PORT", "3306")

# JWT configuration
SECRET_KEY = os.getenv("SECRET_KEY", "your_secret_key_here")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")

# Application configuration
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# Tenant configuration
PLATFORM_DOMAIN = os.getenv("PLATFORM_DOMAIN", "yourplatform.com")
RESERVED_SUBDOMAINS = [
    name.strip().lower()
    for name in os.getenv("RESERVED_SUBDOMAINS", "www,api,admin,app,dashboard").split(",")
    if name.strip()
]
TENANT_HEADER = "X-Tenant-Slug"

# Pagination
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# Email configuration
EMAIL_FROM = os.getenv("EMAIL_FROM", "no-reply@sitebuilder.com")
EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "Site Builder")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "1025"))
EMAIL_SERVER = os.getenv("EMAIL_SERVER", "mailhog")
EMAIL_SUPPRESS_SEND = os.getenv("EMAIL_SUPPRESS_SEND", "false").lower() == "true"

# Database URL
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
