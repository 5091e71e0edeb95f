# ---------- routes/auth_routes.py ----------
"""
Auth routes backed by Supabase Auth.
Sign-up / sign-in hand back the Supabase session; clients send its
access_token as a Bearer token on every task request.
"""
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from auth import CurrentUser, get_current_user
from config import PROFILES_TABLE
from models.task import Profile
from supabase_client import sign_up_user, sign_in_user, sign_out_user
from supabase_rest import sb_select

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: Optional[str] = None


class SignInRequest(BaseModel):
    email: str
    password: str


def _session_payload(response) -> dict:
    session = getattr(response, "session", None)
    user = getattr(response, "user", None)
    return {
        "access_token": session.access_token if session else None,
        "refresh_token": session.refresh_token if session else None,
        "user_id": user.id if user else None,
        "email": user.email if user else None,
    }


# ── Routes ────────────────────────────────────────────────────────
@router.post("/signup")
async def signup(body: SignUpRequest):
    try:
        metadata = {"full_name": body.full_name} if body.full_name else None
        response = sign_up_user(body.email, body.password, metadata)
    except Exception as e:
        logger.error(f"Sign-up failed for {body.email}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "data": _session_payload(response)}


@router.post("/login")
async def login(body: SignInRequest):
    try:
        response = sign_in_user(body.email, body.password)
    except Exception as e:
        logger.warning(f"Sign-in failed for {body.email}: {e}")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return {"status": "success", "data": _session_payload(response)}


@router.post("/logout")
async def logout(user: CurrentUser = Depends(get_current_user)):
    try:
        sign_out_user(user.access_token)
    except Exception as e:
        logger.error(f"Sign-out failed for {user.id}: {e}")
        raise HTTPException(status_code=502, detail="Could not sign out. Please try again.")
    return {"status": "success"}


@router.get("/me")
async def me(user: CurrentUser = Depends(get_current_user)):
    try:
        rows = sb_select(PROFILES_TABLE, filters={"id": user.id}, token=user.access_token)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching profile {user.id}: {e}")
        raise HTTPException(status_code=502, detail="Could not load profile")
    if not rows:
        return Profile(id=user.id, email=user.email)
    return Profile.model_validate(rows[0])
