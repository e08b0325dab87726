"""Server bootstrap for the text-merge MCP service.

Creates the FastMCP instance, configures logging, wires the shared GitHub
client into the tools and starts the MCP server (stdio transport).
"""

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import GITHUB_TIMEOUT, GITHUB_USER_AGENT, HTTP_VERIFY, LOG_LEVEL
from core.log import setup_logging

from tools.count_tokens import register as register_count_tokens
from tools.list_files import register as register_list_files
from tools.merge_files import register as register_merge_files
from tools.read_file import register as register_read_file

mcp = FastMCP("text-merge-mcp")


def register_tools() -> None:
    github_client = GitHubClient(timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY, user_agent=GITHUB_USER_AGENT)

    register_list_files(mcp, github_client=github_client)
    register_read_file(mcp, github_client=github_client)
    register_merge_files(mcp, github_client=github_client)
    register_count_tokens(mcp)


def register_all() -> None:
    setup_logging(LOG_LEVEL)
    register_tools()


register_all()


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
