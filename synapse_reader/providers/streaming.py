"""Streaming response parsing: Server-Sent Events and newline-delimited JSON"""

from typing import AsyncIterator, Dict, Any
import json
import logging

logger = logging.getLogger(__name__)

SSE_DONE = "[DONE]"


async def parse_sse_stream(lines: AsyncIterator[str]) -> AsyncIterator[Dict[str, Any]]:
    """
    Parse Server-Sent Events into JSON payloads.

    Only `data:` lines are considered; the OpenAI `[DONE]` sentinel ends the
    stream. Payloads that are not JSON objects are skipped.

    Args:
        lines: Text lines of the response body (httpx `aiter_lines()`)

    Yields:
        Dict with the parsed event payload

    Example:
        >>> async with client.stream("POST", url, json=body) as response:
        ...     async for event in parse_sse_stream(response.aiter_lines()):
        ...         print(event.get("type"))
    """
    async for line in lines:
        line = line.strip()
        if not line.startswith("data:"):
            continue
        data = line[5:].strip()
        if data == SSE_DONE:
            break
        try:
            event = json.loads(data)
        except json.JSONDecodeError:
            logger.debug(f"Skipping invalid SSE payload: {data[:80]}")
            continue
        if isinstance(event, dict):
            yield event


async def parse_ndjson_stream(lines: AsyncIterator[str]) -> AsyncIterator[Dict[str, Any]]:
    """
    Parse newline-delimited JSON (Ollama streaming format).

    Args:
        lines: Text lines of the response body

    Yields:
        Dict for every line holding a JSON object (other lines are skipped)
    """
    async for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            event = json.loads(line)
        except json.JSONDecodeError:
            logger.debug(f"Skipping invalid NDJSON line: {line[:80]}")
            continue
        if isinstance(event, dict):
            yield event


def field(event: Any, key: str) -> Dict[str, Any]:
    """Nested object under `key`, or {} when missing or not an object"""
    value = event.get(key) if isinstance(event, dict) else None
    return value if isinstance(value, dict) else {}


def first(event: Any, key: str) -> Dict[str, Any]:
    """First object of the list under `key`, or {} when there is none"""
    value = event.get(key) if isinstance(event, dict) else None
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def text_of(value: Any) -> str:
    """Text chunk, or "" for anything that is not a string"""
    return value if isinstance(value, str) else ""
