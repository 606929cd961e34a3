import ipaddress
from typing import Optional

from fastapi import Request

# Proxy headers checked in order of preference
CLIENT_IP_HEADERS = (
    "x-forwarded-for",
    "x-real-ip",
    "cf-connecting-ip",
)


def _valid_ip(value: str) -> Optional[str]:
    candidate = value.split(",")[0].strip()
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return None
    return candidate


def get_client_ip(request: Request) -> str:
    """Client address for logs; malformed proxy headers are skipped."""
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            ip = _valid_ip(value)
            if ip:
                return ip
    if request.client:
        return request.client.host
    return "unknown"


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "unknown")
