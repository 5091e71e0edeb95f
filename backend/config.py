import os
from dotenv import load_dotenv

load_dotenv()

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_TIMEOUT = float(os.getenv("SUPABASE_TIMEOUT", "10"))

# --- JWT Configuration (Supabase access tokens) ---
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")

# --- Tables ---
TASKS_TABLE = os.getenv("TASKS_TABLE", "tasks")
PROFILES_TABLE = os.getenv("PROFILES_TABLE", "profiles")

# --- App ---
APP_NAME = os.getenv("APP_NAME", "StudyTrack")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def is_supabase_configured() -> bool:
    """Check the client-side Supabase settings (URL + anon key) are present."""
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)


def require_supabase() -> None:
    """Fail fast on startup, the same way the web client refuses to boot."""
    if not is_supabase_configured():
        raise RuntimeError("Missing Supabase environment variables")
