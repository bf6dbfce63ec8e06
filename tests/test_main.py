from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastmcp.client import Client
from fastmcp.client.transports import FastMCPTransport

from pr_style_mcp.main import get_working_directory, mcp


def test_main():
    assert mcp is not None


def test_working_directory(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.setenv("PR_STYLE_WORKING_DIRECTORY", str(tmp_path))

    assert get_working_directory() == tmp_path


@pytest.fixture
async def main_mcp_client() -> AsyncGenerator[Client[FastMCPTransport], Any]:
    async with Client[FastMCPTransport](transport=mcp) as mcp_client:
        yield mcp_client


async def test_list_tools(main_mcp_client: Client[FastMCPTransport]):
    list_tools = await main_mcp_client.list_tools()

    assert [tool.name for tool in list_tools] == ["learn_pr_style", "generate_pr", "save_pr_description", "get_pr_style"]
