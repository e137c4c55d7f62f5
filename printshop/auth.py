from __future__ import annotations

import hmac

import bcrypt
from fastapi import Request

from .errors import AdminRequired


def verify_password(plain: str, stored: str) -> bool:
    stored = stored or ""
    plain = plain or ""
    try:
        if stored.startswith("$2"):
            return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
        return hmac.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # Malformed bcrypt hash
        return False


def check_credentials(request: Request, username: str, password: str) -> bool:
    settings = request.app.state.settings
    return hmac.compare_digest((username or "").encode("utf-8"), settings.admin_user.encode("utf-8")) and verify_password(password, settings.admin_password)


def is_admin(request: Request) -> bool:
    return bool(request.session.get("is_admin"))


def require_admin(request: Request) -> None:
    if request.app.state.settings.admin_login_required and not is_admin(request):
        raise AdminRequired()
