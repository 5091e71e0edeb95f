# supabase_client.py — Supabase Auth client initialization and helpers

from supabase import create_client, Client
from config import SUPABASE_URL, SUPABASE_ANON_KEY

# Global Supabase client instance
_supabase_client: Client = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with anonymous key (limited permissions).
    Used only for the auth endpoints; table access goes through supabase_rest.
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_ANON_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment variables")

        _supabase_client = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)

    return _supabase_client


# Authentication helpers
def sign_up_user(email: str, password: str, metadata: dict = None):
    """Register a new user with Supabase Auth."""
    supabase = get_supabase_client()
    return supabase.auth.sign_up({
        "email": email,
        "password": password,
        "options": {
            "data": metadata or {}
        }
    })


def sign_in_user(email: str, password: str):
    """Sign in a user with Supabase Auth."""
    supabase = get_supabase_client()
    return supabase.auth.sign_in_with_password({
        "email": email,
        "password": password
    })


def sign_out_user(access_token: str):
    """Revoke the session behind `access_token`."""
    supabase = get_supabase_client()
    return supabase.auth.admin.sign_out(access_token)
