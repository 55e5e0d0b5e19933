import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY")

# JWT configuration (Supabase legacy HS256 secret)
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
JWT_ISSUER = os.getenv("JWT_ISSUER", "supabase")
JWT_ALGORITHM = "HS256"

# Cookies
ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"
ACCESS_TOKEN_MAX_AGE = 24 * 60 * 60  # 24 hours
REFRESH_TOKEN_MAX_AGE = 7 * 24 * 60 * 60  # 7 days

APP_ENV = os.getenv("APP_ENV", "development")
CLIENT_URL = os.getenv("CLIENT_URL")
OAUTH_REDIRECT_URL = os.getenv("OAUTH_REDIRECT_URL", "http://localhost:3000/auth/callback")

# Pagination
NOTES_PAGE_SIZE = int(os.getenv("NOTES_PAGE_SIZE", "12"))
NOTES_MAX_PAGE_SIZE = int(os.getenv("NOTES_MAX_PAGE_SIZE", "100"))


def is_production() -> bool:
    return APP_ENV == "production"


def get_jwt_secret() -> str:
    """Get the shared JWT secret, failing loudly when it is not configured"""
    if not SUPABASE_JWT_SECRET:
        raise ValueError("SUPABASE_JWT_SECRET must be set")
    return SUPABASE_JWT_SECRET


def get_allowed_origins() -> list[str]:
    origins = [
        CLIENT_URL,
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:3002",
    ]
    return [origin for origin in origins if origin]
