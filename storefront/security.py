"""
Bearer-token verification for customers and admins

Tokens are signed elsewhere (login flows); this module only checks them and
exposes FastAPI dependencies that resolve the caller.
"""
from datetime import timedelta
from typing import Optional

import jwt
from fastapi import Header
from pydantic import BaseModel

from storefront.config import settings
from storefront.errors import AuthError
from storefront.utils import utcnow


class CustomerPrincipal(BaseModel):
    """Claims carried by a customer token"""
    customer_id: int
    phone: Optional[str] = None


class AdminPrincipal(BaseModel):
    """Claims carried by an admin token"""
    admin_id: int
    email: Optional[str] = None
    role: str = "admin"


def create_token(claims: dict, secret: str, expires_in: timedelta = timedelta(hours=24)) -> str:
    """Sign a token with an expiry claim"""
    payload = dict(claims)
    payload["exp"] = utcnow() + expires_in
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Optional[dict]:
    """Return the token claims, or None when the signature or expiry is bad"""
    try:
        return jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def get_token_from_header(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None


def _decode_customer(token: str) -> Optional[CustomerPrincipal]:
    payload = decode_token(token, settings.JWT_SECRET)
    if not payload or "customerId" not in payload:
        return None
    return CustomerPrincipal(customer_id=payload["customerId"], phone=payload.get("phone"))


def get_current_customer(authorization: Optional[str] = Header(None)) -> CustomerPrincipal:
    """Dependency: require a valid customer token"""
    token = get_token_from_header(authorization)
    if not token:
        raise AuthError("Please sign in to continue")
    customer = _decode_customer(token)
    if customer is None:
        raise AuthError("Invalid or expired token")
    return customer


def get_optional_customer(authorization: Optional[str] = Header(None)) -> Optional[CustomerPrincipal]:
    """Dependency: customer token if one was sent, guests get None"""
    token = get_token_from_header(authorization)
    if not token:
        return None
    return _decode_customer(token)


def require_admin(authorization: Optional[str] = Header(None)) -> AdminPrincipal:
    """Dependency: require a valid admin token"""
    token = get_token_from_header(authorization)
    if not token:
        raise AuthError("Unauthorized")
    payload = decode_token(token, settings.ADMIN_JWT_SECRET)
    if not payload or "adminId" not in payload:
        raise AuthError("Unauthorized")
    return AdminPrincipal(
        admin_id=payload["adminId"],
        email=payload.get("email"),
        role=payload.get("role", "admin"),
    )


def create_customer_token(customer_id: int, phone: str = None) -> str:
    return create_token({"customerId": customer_id, "phone": phone}, settings.JWT_SECRET)


def create_admin_token(admin_id: int, email: str = None, role: str = "admin") -> str:
    return create_token({"adminId": admin_id, "email": email, "role": role}, settings.ADMIN_JWT_SECRET)
