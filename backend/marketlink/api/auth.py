"""
Authentication API endpoints for MarketLink
- Current user ("who am I")
"""
from fastapi import APIRouter, Depends

from marketlink.core.auth import TokenUser, get_current_user


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.get("/me", response_model=TokenUser)
async def get_current_user_info(
    current_user: TokenUser = Depends(get_current_user)
):
    """Get current user information from the bearer token"""
    return current_user
