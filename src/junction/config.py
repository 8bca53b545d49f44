"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, offload_sync_handlers=True)
    """

    # Error bodies include details (and tracebacks for 500s) when True
    debug: bool = False

    # Run plain ``def`` route handlers on anyio's worker thread pool
    offload_sync_handlers: bool = False

    # Applied to the "junction" logger when the app freezes ("" leaves it alone)
    log_level: str = ""

    # Body of the default 404 response
    not_found_detail: str = "Not Found"

    # Content type for handlers that return ``str``
    text_content_type: str = "text/plain; charset=utf-8"
