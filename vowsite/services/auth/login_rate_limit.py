"""
Rate limiter for admin password attempts to prevent brute-force attacks.
Disabled when REDIS_URL is not configured.
"""
import logging

import redis
from starlette.requests import Request

from vowsite.core.config import settings

logger = logging.getLogger("auth")

KEY_PREFIX = "vows_admin_attempts:"


def _client() -> redis.Redis | None:
    if not settings.redis_url:
        return None
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)


def get_client_ip(request: Request) -> str:
    """Client IP (supports X-Forwarded-For from proxy)."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and settings.app_env == "production":
        trusted = settings.trusted_proxy_ips_set
        if trusted and request.client and request.client.host in trusted:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "127.0.0.1"


def is_rate_limited(client_ip: str) -> bool:
    """True when the IP has used up its failed attempts in the current window."""
    try:
        client = _client()
        if client is None:
            return False
        current = client.get(f"{KEY_PREFIX}{client_ip}")
        return current is not None and int(current) >= settings.admin_rate_limit_attempts
    except redis.RedisError as e:
        logger.warning("admin_rate_limit_redis_error", extra={"error": str(e)})
        return False  # Fail open - allow attempts if Redis is down


def record_failed_attempt(client_ip: str) -> None:
    try:
        client = _client()
        if client is None:
            return
        key = f"{KEY_PREFIX}{client_ip}"
        current = client.incr(key)
        if current == 1:
            client.expire(key, settings.admin_rate_limit_window_seconds)
        if current >= settings.admin_rate_limit_attempts:
            logger.warning("admin_rate_limited", extra={"ip": client_ip, "attempts": current})
    except redis.RedisError as e:
        logger.warning("admin_rate_limit_redis_error", extra={"error": str(e)})


def reset_attempts(client_ip: str) -> None:
    """Reset counter after a successful admin call."""
    try:
        client = _client()
        if client is None:
            return
        client.delete(f"{KEY_PREFIX}{client_ip}")
    except redis.RedisError:
        pass
