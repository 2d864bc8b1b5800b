"""
Request and response helpers for auth endpoints.

Dependencies: fastapi, explorely.configs
System role: Cookie mirror of the bearer token and client metadata
"""

from fastapi import Request, Response

from explorely.configs.auth import AuthSettings


def client_info(request: Request) -> tuple[str | None, str | None]:
    """(user agent, client IP) of a request."""
    user_agent = request.headers.get("User-Agent")
    ip_address = request.client.host if request.client else None
    return user_agent, ip_address


def set_auth_cookie(response: Response, token: str, settings: AuthSettings) -> None:
    """
    Mirror the bearer token into the auth cookie.

    Args:
        response: Outgoing response
        token: Issued token
        settings: Cookie name, security flag and lifetime
    """
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.token_max_age_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_auth_cookie(response: Response, settings: AuthSettings) -> None:
    """Drop the auth cookie."""
    response.delete_cookie(key=settings.cookie_name)
