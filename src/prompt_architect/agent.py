"""Client for the remote prompt-generation agent.

The agent endpoint takes ``{"message": ..., "agent_id": ...}`` and answers
with an envelope of the form::

    {
      "success": true,
      "response": {"status": "success", "result": {"response": "..."}, "message": "..."},
      "error": "..."
    }
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx

from .config import get_agent_url, get_api_key, get_timeout

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response received"
UNKNOWN_ERROR = "Unknown error occurred"
SEND_FAILED = "Failed to send message"
ERROR_PREFIX = "Error: "


class AgentError(Exception):
    """Raised when the agent endpoint cannot be reached or rejects a call."""


@dataclass
class AgentResponse:
    status: str = ""
    result: dict = field(default_factory=dict)  # {"response": str} on success
    message: str | None = None


@dataclass
class AgentResult:
    success: bool
    response: AgentResponse = field(default_factory=AgentResponse)
    error: str | None = None


def result_from_dict(data: dict) -> AgentResult:
    """Build an AgentResult from a decoded response envelope."""
    response = data.get("response") or {}
    if not isinstance(response, dict):
        response = {}
    result = response.get("result")
    return AgentResult(
        success=bool(data.get("success")),
        response=AgentResponse(
            status=str(response.get("status") or ""),
            result=result if isinstance(result, dict) else {},
            message=response.get("message"),
        ),
        error=data.get("error"),
    )


def interpret_result(result: AgentResult) -> str:
    """Return the assistant text for a completed agent call.

    Only a successful call with status "success" yields the agent's reply;
    anything else becomes an error string.
    """
    if result.success and result.response.status == "success":
        text = result.response.result.get("response")
        return str(text) if text else NO_RESPONSE
    return f"{ERROR_PREFIX}{result.error or result.response.message or UNKNOWN_ERROR}"


def describe_failure(exc: BaseException) -> str:
    """Return the assistant text for an agent call that raised."""
    return f"{ERROR_PREFIX}{str(exc) or SEND_FAILED}"


class AgentClient(ABC):
    """A single request/response call to a remote agent."""

    @abstractmethod
    async def invoke(self, prompt: str, agent_id: str) -> AgentResult:
        """Send ``prompt`` to ``agent_id`` and return its result envelope."""
        ...


class HttpAgentClient(AgentClient):
    """Agent client that POSTs JSON to an HTTP endpoint."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or get_agent_url()
        self.api_key = get_api_key() if api_key is None else api_key
        self.timeout = timeout or get_timeout()
        self._transport = transport

    async def invoke(self, prompt: str, agent_id: str) -> AgentResult:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    self.url,
                    json={"message": prompt, "agent_id": agent_id},
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.warning("Agent %s timed out after %.0fs", agent_id, self.timeout)
            raise AgentError(f"Timeout after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            logger.warning("Agent %s request failed: %s", agent_id, e)
            raise AgentError(str(e) or SEND_FAILED) from e

        if resp.status_code >= 400:
            raise AgentError(f"HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError as e:
            raise AgentError("Agent returned invalid JSON") from e
        if not isinstance(data, dict):
            raise AgentError("Agent returned an unexpected payload")
        return result_from_dict(data)
