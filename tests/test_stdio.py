"""Tests for the line-delimited stdio transport."""

import io
import json

import pytest

from conftest import make_page
from notion_knowledge_mcp import stdio
from notion_knowledge_mcp.mcp import INVALID_PARAMS, PARSE_ERROR


@pytest.mark.asyncio
async def test_handle_line_round_trip(dispatcher):
    output = await stdio.handle_line(
        dispatcher, '{"jsonrpc": "2.0", "id": "abc", "method": "initialize"}\n'
    )

    response = json.loads(output)
    assert response["id"] == "abc"
    assert response["result"]["protocolVersion"] == "2024-11-05"


@pytest.mark.asyncio
async def test_malformed_line_yields_parse_error_with_null_id(dispatcher):
    output = await stdio.handle_line(dispatcher, '{"id": 5, "method": ')

    response = json.loads(output)
    assert response["id"] is None
    assert response["error"]["code"] == PARSE_ERROR


@pytest.mark.asyncio
@pytest.mark.parametrize("line", ["", "\n", "   \n"])
async def test_blank_lines_are_ignored(dispatcher, line):
    assert await stdio.handle_line(dispatcher, line) is None


@pytest.mark.asyncio
async def test_notification_writes_nothing(dispatcher):
    line = '{"jsonrpc": "2.0", "method": "notifications/initialized"}'
    assert await stdio.handle_line(dispatcher, line) is None


@pytest.mark.asyncio
async def test_non_ascii_output_is_preserved(dispatcher, notion):
    notion.reply_with_pages(make_page("React 筆記", project="Web應用"))
    line = json.dumps(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "tools/call",
            "params": {"name": "search_knowledge", "arguments": {"query": "react"}},
        }
    )

    output = await stdio.handle_line(dispatcher, line)

    assert "React 筆記" in output
    assert "Web應用" in output


@pytest.mark.asyncio
async def test_serve_processes_lines_in_order_until_eof(dispatcher, notion):
    instream = io.StringIO(
        "\n".join(
            [
                '{"jsonrpc": "2.0", "id": 1, "method": "initialize"}',
                "not json",
                "",
                '{"jsonrpc": "2.0", "method": "notifications/initialized"}',
                '{"jsonrpc": "2.0", "id": 2, "method": "tools/call", '
                '"params": {"name": "search_knowledge", "arguments": {}}}',
                '{"jsonrpc": "2.0", "id": 3, "method": "tools/list"}',
            ]
        )
    )
    outstream = io.StringIO()

    await stdio.serve(dispatcher, instream, outstream)

    responses = [json.loads(line) for line in outstream.getvalue().splitlines()]
    assert [r["id"] for r in responses] == [1, None, 2, 3]
    assert responses[1]["error"]["code"] == PARSE_ERROR
    assert responses[2]["error"]["code"] == INVALID_PARAMS
    assert notion.requests == []


@pytest.mark.asyncio
async def test_invalid_utf8_line_yields_parse_error(dispatcher):
    output = await stdio.handle_line(dispatcher, b'\xff\xfe{"bad"\n')

    response = json.loads(output)
    assert response["id"] is None
    assert response["error"]["code"] == PARSE_ERROR
    assert "UTF-8" in response["error"]["message"]


@pytest.mark.asyncio
async def test_serve_keeps_going_after_invalid_utf8(dispatcher):
    instream = io.BytesIO(
        b'\xff\xfe{"bad"\n'
        b'{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
        + '{"jsonrpc": "2.0", "id": 2, "method": "initialize", "params": {"note": "筆記"}}\n'.encode()
    )
    outstream = io.StringIO()

    await stdio.serve(dispatcher, instream, outstream)

    responses = [json.loads(line) for line in outstream.getvalue().splitlines()]
    assert [r["id"] for r in responses] == [None, 1, 2]
    assert responses[0]["error"]["code"] == PARSE_ERROR
    assert responses[1]["result"] == {}
    assert responses[2]["result"]["protocolVersion"] == "2024-11-05"


def test_main_exits_with_error_when_unconfigured(monkeypatch, tmp_path):
    monkeypatch.delenv("NOTION_TOKEN", raising=False)
    monkeypatch.delenv("NOTION_DATABASE_ID", raising=False)
    monkeypatch.chdir(tmp_path)

    assert stdio.main([]) == 1


def test_main_returns_zero_on_eof(monkeypatch, tmp_path):
    monkeypatch.setenv("NOTION_TOKEN", "secret_abc")
    monkeypatch.setenv("NOTION_DATABASE_ID", "db-1")
    monkeypatch.chdir(tmp_path)
    stdin = io.TextIOWrapper(io.BytesIO(b'{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'))
    monkeypatch.setattr("sys.stdin", stdin)
    stdout = io.StringIO()
    monkeypatch.setattr("sys.stdout", stdout)

    assert stdio.main([]) == 0
    assert json.loads(stdout.getvalue()) == {"jsonrpc": "2.0", "id": 1, "result": {}}


def test_main_survives_non_utf8_stdin(monkeypatch, tmp_path):
    monkeypatch.setenv("NOTION_TOKEN", "secret_abc")
    monkeypatch.setenv("NOTION_DATABASE_ID", "db-1")
    monkeypatch.chdir(tmp_path)
    raw = b'\xff\xfe{"bad"\n{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(raw)))
    stdout = io.StringIO()
    monkeypatch.setattr("sys.stdout", stdout)

    assert stdio.main([]) == 0
    responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert responses[0]["error"]["code"] == PARSE_ERROR
    assert responses[1] == {"jsonrpc": "2.0", "id": 1, "result": {}}
