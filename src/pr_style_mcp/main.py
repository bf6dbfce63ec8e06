import os
from logging import Logger
from pathlib import Path
from typing import Literal

import click
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import LoggingMiddleware
from fastmcp.utilities.logging import configure_logging, get_logger

from pr_style_mcp.servers.pr_style import PullRequestStyleServer

logger: Logger = get_logger(name=__name__)

configure_logging()


def get_working_directory() -> Path:
    return Path(os.getenv("PR_STYLE_WORKING_DIRECTORY") or Path.cwd())


def new_mcp_server(working_directory: Path | None = None) -> FastMCP[None]:
    mcp: FastMCP[None] = FastMCP[None](
        name="PR Style MCP",
        middleware=[LoggingMiddleware(include_payloads=True, logger=logger)],
    )

    pr_style_server: PullRequestStyleServer = PullRequestStyleServer(
        working_directory=working_directory or get_working_directory(), logger=logger
    )
    _ = pr_style_server.register_tools(fastmcp=mcp)

    return mcp


mcp: FastMCP[None] = new_mcp_server()


@click.command()
@click.option(
    "--mcp-transport",
    type=click.Choice(["stdio", "streamable-http"]),
    default="stdio",
    help="The transport to run the MCP server on",
)
@click.option(
    "--working-directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help=(
        "A directory inside the git repository to learn from and describe. "
        "Defaults to PR_STYLE_WORKING_DIRECTORY or the current directory."
    ),
)
def run_mcp(mcp_transport: Literal["stdio", "streamable-http"], working_directory: Path | None):
    server: FastMCP[None] = new_mcp_server(working_directory=working_directory) if working_directory else mcp
    server.run(transport=mcp_transport)


if __name__ == "__main__":
    run_mcp()
