from __future__ import annotations

from typing import Optional

from ..config import Settings, get_settings
from ..schemas.contexts import ServerMetadata
from .catalog import CONTEXT_CATALOG

ICON_PATH = "/icon.png"


def root_url_for(host: str, protocol: str) -> str:
    # Anything not served from localhost sits behind TLS termination.
    scheme = "http" if protocol == "http" and host.startswith("localhost") else "https"
    return f"{scheme}://{host}"


def describe(
    request_host: Optional[str],
    request_protocol: str,
    settings: Optional[Settings] = None,
) -> ServerMetadata:
    """Build the discovery document for a request arriving on the given host."""
    settings = settings or get_settings()
    host = request_host or settings.default_host
    root_url = root_url_for(host, request_protocol)

    return ServerMetadata(
        name=settings.server_name,
        description=settings.server_description,
        root_url=root_url,
        icon_url=f"{root_url}{ICON_PATH}",
        contexts=list(CONTEXT_CATALOG),
    )
