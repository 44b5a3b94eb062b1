"""Device fingerprint used to identify this machine to the API"""

import getpass
import hashlib
import logging
import platform
import secrets
import socket

logger = logging.getLogger(__name__)


def get_machine_id() -> str:
    """
    Stable hash of host name, platform, architecture and user name

    Computed on every run and never persisted. When the system traits
    cannot be read a random per-process identifier is returned instead.

    Returns:
        Hex digest or ``unknown-device-<hex>``
    """
    try:
        parts = [
            socket.gethostname(),
            platform.system().lower(),
            platform.machine(),
            getpass.getuser(),
        ]
    except (OSError, KeyError, ImportError) as e:
        logger.debug(f"Falling back to random device id: {e}")
        return f"unknown-device-{secrets.token_hex(8)}"

    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
