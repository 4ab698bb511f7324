# pingshell/resolver.py
import ipaddress
import logging
import socket
from typing import Optional

logger = logging.getLogger(__name__)


def is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def resolve_address(host: str) -> Optional[str]:
    """Return the first address host resolves to, or None. Literals come back unchanged."""
    if is_ip_literal(host):
        return host
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, OSError, UnicodeError) as e:
        logger.debug("could not resolve %r: %s", host, e)
        return None
    for _family, _type, _proto, _canon, sockaddr in infos:
        return sockaddr[0]
    return None


def is_valid_host(host: str) -> bool:
    """True if host is an IP literal or DNS gives at least one address for it."""
    if not host:
        return False
    return resolve_address(host) is not None
