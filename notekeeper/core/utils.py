"""
Core Utilities.

Shared utility functions used across the application.
"""

import socket
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_host_ipv4() -> str | None:
    """
    Return the first non-loopback IPv4 address of this host.

    Tries the address the OS would route external traffic from, then
    the addresses bound to the hostname. Returns None when the host only
    has loopback addresses.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            # UDP connect sends nothing; it only selects a route
            probe.connect(("192.0.2.1", 80))
            address = probe.getsockname()[0]
            if not address.startswith("127.") and address != "0.0.0.0":
                return address
    except OSError:
        pass

    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
    except OSError:
        return None

    for address in addresses:
        if not address.startswith("127."):
            return address
    return None
