"""WebSocket JSON-RPC client for a record-scanning ledger service."""

import asyncio
import base64
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from websockets.asyncio.client import ClientConnection, connect
from websockets.protocol import State

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base exception for ledger service errors."""

class LedgerConnectionError(LedgerError):
    """Connection-related errors."""

class LedgerQueryError(LedgerError):
    """Query-related errors."""


class LedgerRpcClient:
    """
    Async client for the ledger-query JSON-RPC API.

    The service scans blocks with the supplied credential and answers with
    decrypted records, so it is expected to run on a trusted host.
    """

    def __init__(
        self,
        url: str = "ws://localhost:3030",
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
        max_message_size: int = 16 * 1024 * 1024,
    ):
        self.url = url
        self.username = username
        self.password = password
        self.timeout = timeout
        self.max_message_size = max_message_size
        self._ws: Optional[ClientConnection] = None
        self._request_id = 0

    def _get_headers(self) -> Dict[str, str]:
        if self.username and self.password:
            encoded = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            return {"Authorization": f"Basic {encoded}"}
        return {}

    async def connect(self) -> bool:
        """Connect to the ledger service. Returns True on success."""
        try:
            connect_kwargs: Dict[str, Any] = {"max_size": self.max_message_size}
            if headers := self._get_headers():
                connect_kwargs["additional_headers"] = headers
            self._ws = await connect(self.url, **connect_kwargs)
            logger.info(f"Connected to ledger service at {self.url}")
            return True
        except ConnectionRefusedError:
            logger.error(f"Connection refused. Is the ledger service running at {self.url}?")
            return False
        except Exception as e:
            logger.error(f"Failed to connect to ledger service: {e}")
            return False

    async def disconnect(self):
        if self._ws:
            await self._ws.close()
            self._ws = None
            logger.info("Disconnected from ledger service")

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def __aenter__(self):
        if not await self.connect():
            raise LedgerConnectionError(f"Failed to connect to {self.url}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def _send_request(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send JSON-RPC request and wait for its result."""
        if not self._ws:
            raise LedgerConnectionError("Not connected to ledger service")

        request: Dict[str, Any] = {"jsonrpc": "2.0", "method": method, "id": self._next_request_id()}
        if params:
            request["params"] = params

        try:
            await self._ws.send(json.dumps(request))
            response = json.loads(await asyncio.wait_for(self._ws.recv(), timeout=self.timeout))
        except asyncio.TimeoutError:
            raise LedgerQueryError(f"Request timed out after {self.timeout}s: {method}")
        except Exception as e:
            raise LedgerQueryError(f"Request failed: {e}") from e

        if not isinstance(response, dict):
            raise LedgerQueryError(f"Malformed response to {method}: {response!r}")
        if response.get("error") is not None:
            err = response["error"]
            raise LedgerQueryError(f"Ledger error: {err.get('message', err) if isinstance(err, dict) else err}")
        if "result" in response:
            return response["result"]
        raise LedgerQueryError(f"Malformed response to {method}: {response}")

    async def get_latest_height(self) -> int:
        result = await self._send_request("getLatestHeight")
        height = result.get("height") if isinstance(result, dict) else result
        if isinstance(height, bool) or not isinstance(height, int):
            raise LedgerQueryError(f"Invalid height in response: {result!r}")
        return height

    async def find_unspent_records(
        self,
        start_height: int,
        end_height: int,
        credential: str,
        amounts: Optional[Sequence[int]] = None,
        program: Optional[str] = None,
        nonces: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {
            "startHeight": start_height,
            "endHeight": end_height,
            "credential": credential,
            "amounts": list(amounts) if amounts is not None else None,
            "program": program,
            "nonces": list(nonces or []),
        }
        result = await self._send_request("findUnspentRecords", params)
        if isinstance(result, dict):
            result = result.get("records", [])
        if not isinstance(result, list):
            raise LedgerQueryError(f"Expected a list of records, got {type(result).__name__}")
        return result

    async def health_check(self) -> Dict[str, Any]:
        try:
            height = await self.get_latest_height()
            return {"status": "healthy", "connected": True, "latest_height": height}
        except Exception as e:
            return {"status": "unhealthy", "connected": self.is_connected, "error": str(e)}
