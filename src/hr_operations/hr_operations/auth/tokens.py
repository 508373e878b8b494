from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import jwt

from ..common.datetime_utils import utcnow
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


@dataclass(frozen=True)
class CurrentUser:
    """Identity read from a verified token."""

    id: str
    role: Role
    name: str = ""
    email: str = ""
    emp_code: str = ""


def decode_token(token: str, *, secret: str) -> CurrentUser:
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    employee_id = claims.get("id") or claims.get("sub")
    if not employee_id:
        raise AuthenticationError("Invalid token")
    try:
        role = Role(claims.get("role"))
    except ValueError:
        raise AuthenticationError("Invalid token")

    return CurrentUser(
        id=str(employee_id),
        role=role,
        name=str(claims.get("name") or ""),
        email=str(claims.get("email") or ""),
        emp_code=str(claims.get("emp_code") or ""),
    )


def issue_token(
    *,
    secret: str,
    employee_id: str,
    role: Role,
    name: str = "",
    email: str = "",
    emp_code: str = "",
    expires_in: Optional[timedelta] = timedelta(days=1),
) -> str:
    """Sign a token. Used by the dev script and tests; production tokens come from the login service."""
    claims = {
        "id": employee_id,
        "role": Role(role).value,
        "name": name,
        "email": email,
        "emp_code": emp_code,
        "iat": utcnow(),
    }
    if expires_in is not None:
        claims["exp"] = utcnow() + expires_in
    return jwt.encode(claims, secret, algorithm=ALGORITHM)
