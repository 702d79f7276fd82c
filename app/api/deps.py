"""
Shared API dependencies
"""
from typing import Optional
from uuid import UUID

from fastapi import Header

def get_current_user_id(x_user_id: Optional[UUID] = Header(None)) -> Optional[UUID]:
    """Acting user, forwarded by the gateway that authenticated the request"""
    return x_user_id
