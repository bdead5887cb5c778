import logging
from typing import Optional

import httpx
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import AUTH_TIMEOUT_SECONDS, SUPABASE_ANON_KEY, SUPABASE_URL
from .database import get_db
from .errors import translate_db_error
from .models import AdminProfile

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def verify_supabase_token(token: str) -> dict:
    """
    Resolve an access token to its user through the Supabase auth API.
    The identity provider validates signature and expiry; we only trust a 200.
    """
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        logger.error("❌ SUPABASE_URL / SUPABASE_ANON_KEY not configured")
        raise HTTPException(status_code=500, detail="Autenticación no configurada")

    try:
        async with httpx.AsyncClient(timeout=AUTH_TIMEOUT_SECONDS) as client:
            response = await client.get(
                f"{SUPABASE_URL}/auth/v1/user",
                headers={"apikey": SUPABASE_ANON_KEY, "Authorization": f"Bearer {token}"},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Identity provider unreachable: {str(e)}")
        raise HTTPException(status_code=503, detail="Servicio de autenticación no disponible") from e

    if response.status_code in (401, 403):
        logger.warning("⚠️ Access token rejected by identity provider")
        raise HTTPException(status_code=401, detail="Sesión inválida o expirada")
    if response.status_code != 200:
        logger.error(f"❌ Identity provider returned HTTP {response.status_code}")
        raise HTTPException(status_code=503, detail="Servicio de autenticación no disponible")

    user = response.json()
    if not user.get("id"):
        raise HTTPException(status_code=401, detail="Sesión inválida o expirada")
    return user


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> AdminProfile:
    """
    Route guard for the whole admin area.

    Applied once on the /admin router, so every admin view requires a valid
    session and an admin profile before any handler runs.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="No autenticado. Inicia sesión para continuar.",
        )

    user = await verify_supabase_token(credentials.credentials)

    try:
        profile = db.query(AdminProfile).filter(AdminProfile.user_id == user["id"]).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise translate_db_error(e) from e

    if not profile:
        logger.warning(f"⚠️ User {user['id']} is not an administrator")
        raise HTTPException(status_code=403, detail="Se requiere acceso de administrador")

    logger.debug(f"✅ Admin {profile.user_id} authenticated")
    return profile
