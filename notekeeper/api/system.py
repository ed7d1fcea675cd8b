"""
System Endpoints.

Landing text and the server's LAN address, used by clients on the
local network to find the API.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from notekeeper.core.utils import get_host_ipv4

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def home() -> str:
    return "Hello from the Notes API server!"


@router.get("/server-ip")
async def server_ip() -> dict[str, str]:
    """Report the first non-loopback IPv4 address of this host."""
    return {"ip": get_host_ipv4() or "Not Found"}
