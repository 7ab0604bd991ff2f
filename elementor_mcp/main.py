"""
Elementor MCP - standalone server

Main entry point for serving the Elementor tools over stdio or HTTP.
"""

import logging

from elementor_mcp.config import Settings, get_settings
from elementor_mcp.services.backend import create_backend
from elementor_mcp.services.mcp_server import create_mcp_server
from elementor_mcp.services.mcp_server.tools.convenience import PRO_TOOL_IDS

logger = logging.getLogger(__name__)


def configure_logging(level_name: str, debug: bool = False) -> None:
    level = logging.DEBUG if debug else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def disabled_tool_ids(settings: Settings) -> list[str]:
    """Configured disabled tools, plus the Pro widget shortcuts when Pro is off."""
    disabled = list(settings.disabled_tools)
    if not settings.pro_widgets:
        disabled += sorted(PRO_TOOL_IDS - set(disabled))
    return disabled


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)

    backend = create_backend(settings)
    server = create_mcp_server(
        backend,
        name=settings.server_name,
        disabled_tools=disabled_tool_ids(settings),
    )
    mcp = server.get_fastmcp_server()

    logger.info(
        f"Starting {settings.server_name} ({settings.environment}) "
        f"over {settings.transport} with {len(server.get_tool_names())} tools"
    )
    if settings.transport == "http":
        mcp.run(transport="http", host=settings.host, port=settings.port)
    else:
        mcp.run()


if __name__ == "__main__":
    main()
