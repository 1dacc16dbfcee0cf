import logging

from httpx import ASGITransport, AsyncClient

from qurantracker.app import create_app
from qurantracker.config import LOG_LEVEL
from qurantracker.mcp.client import TrackerClient
from qurantracker.mcp.server import create_mcp_server


def main():
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    # The ASGI transport skips the app lifespan; the ledger loads on first request
    app = create_app()
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = TrackerClient(http)
    mcp = create_mcp_server(client)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
