"""
Productive MCP Server

Main server class implementing the MCP protocol on top of the tool handlers.
The stdio transport wraps it with the MCP SDK; handle_message() serves raw
JSON-RPC messages.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.common.telemetry import get_tracer
from src.mcp_servers.productive.config import ProductiveMCPConfig
from src.mcp_servers.productive.tools import TOOL_DEFINITIONS, ToolCallResult, ToolHandlers
from src.productive_api.client import ProductiveApi
from src.productive_core.resolution import (
    RedisResolverCache,
    ResolverCache,
    create_resolver_cache,
)

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

NOTIFICATIONS = frozenset({"initialized", "notifications/initialized", "notifications/cancelled"})


class ProductiveMCPServer:
    """
    MCP Server for Productive.io.

    Exposes the consolidated `productive` tool. One API client and one
    resolver cache live for the lifetime of the server and are shared by
    every request.
    """

    def __init__(
        self,
        config: ProductiveMCPConfig | None = None,
        *,
        api: ProductiveApi | None = None,
        resolver_cache: ResolverCache | None = None,
    ):
        """
        Initialize the MCP server.

        Args:
            config: Server configuration. If None, loads from environment.
            api: Pre-built API client (created from config on initialize if omitted)
            resolver_cache: Shared resolver cache (created from config if omitted)
        """
        self._config = config or ProductiveMCPConfig()
        self._api = api
        self._owns_api = api is None
        self._resolver_cache = resolver_cache
        self._tool_handlers: ToolHandlers | None = None
        self._initialized = False

    @property
    def config(self) -> ProductiveMCPConfig:
        return self._config

    @property
    def server_info(self) -> dict[str, Any]:
        """MCP initialize result."""
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {
                "name": self._config.server_name,
                "version": self._config.server_version,
            },
        }

    async def initialize(self) -> None:
        """
        Create the API client, resolver cache and tool handlers.

        Raises:
            ProductiveApiError: If credentials are missing
        """
        if self._initialized:
            return

        with tracer.start_as_current_span("mcp.server.initialize") as span:
            span.set_attribute("server.name", self._config.server_name)

            productive_config = self._config.productive_config()
            if self._api is None:
                self._api = ProductiveApi.from_config(productive_config)
            if self._resolver_cache is None:
                self._resolver_cache = create_resolver_cache(productive_config)

            self._tool_handlers = ToolHandlers(
                self._api,
                self._resolver_cache,
                organization_id=self._api.organization_id,
                user_id=productive_config.user_id,
                resolution_enabled=productive_config.resolution_enabled,
                strict=productive_config.resolve_strict,
            )

            self._initialized = True
            span.set_attribute("server.initialized", True)
            logger.info(f"MCP Server '{self._config.server_name}' initialized")

    async def shutdown(self) -> None:
        """Close the API client (if created here) and the resolver cache."""
        with tracer.start_as_current_span("mcp.server.shutdown"):
            if self._api is not None and self._owns_api:
                await self._api.close()
                self._api = None
            if isinstance(self._resolver_cache, RedisResolverCache):
                await self._resolver_cache.close()

            self._tool_handlers = None
            self._initialized = False
            logger.info(f"MCP Server '{self._config.server_name}' shut down")

    # =========================================================================
    # MCP Protocol Methods
    # =========================================================================

    async def list_tools(self) -> list[dict[str, Any]]:
        return TOOL_DEFINITIONS

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolCallResult:
        """
        Call a tool (MCP tools/call).

        Raises:
            RuntimeError: If server not initialized
            ValueError: If tool not found
        """
        if not self._initialized or not self._tool_handlers:
            raise RuntimeError("Server not initialized. Call initialize() first.")

        with tracer.start_as_current_span("mcp.call_tool") as span:
            span.set_attribute("tool.name", name)
            result = await self._tool_handlers.handle_tool_call(name, arguments or {})
            span.set_attribute("tool.is_error", result.is_error)
            return result

    # =========================================================================
    # Raw JSON-RPC
    # =========================================================================

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """
        Answer one JSON-RPC message without the SDK transport.

        Returns:
            The response, or None for notifications
        """
        method = message.get("method", "")
        params = message.get("params") or {}
        request_id = message.get("id")

        if method in NOTIFICATIONS:
            logger.debug(f"Notification: {method}")
            return None

        handler = self._rpc_methods().get(method)
        if handler is None:
            return _error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        with tracer.start_as_current_span(f"mcp.rpc.{method}") as span:
            span.set_attribute("jsonrpc.id", str(request_id))
            try:
                result = await handler(params)
            except ValueError as e:
                span.set_attribute("jsonrpc.error_code", INVALID_PARAMS)
                return _error_response(request_id, INVALID_PARAMS, str(e))
            except Exception as e:
                logger.exception(f"JSON-RPC {method} failed")
                span.set_attribute("jsonrpc.error_code", INTERNAL_ERROR)
                return _error_response(request_id, INTERNAL_ERROR, f"Internal error: {e}")

        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _rpc_methods(self) -> dict[str, Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]]:
        return {
            "initialize": self._rpc_initialize,
            "tools/list": self._rpc_tools_list,
            "tools/call": self._rpc_tools_call,
            "ping": self._rpc_ping,
            "shutdown": self._rpc_shutdown,
        }

    async def _rpc_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo") or {}
        if client:
            logger.info(f"Client connected: {client.get('name')} {client.get('version', '')}")
        await self.initialize()
        return self.server_info

    async def _rpc_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": await self.list_tools()}

    async def _rpc_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        result = await self.call_tool(params.get("name", ""), params.get("arguments") or {})
        return result.to_content()

    async def _rpc_ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _rpc_shutdown(self, params: dict[str, Any]) -> dict[str, Any]:
        await self.shutdown()
        return {}

    async def __aenter__(self) -> ProductiveMCPServer:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.shutdown()


def _error_response(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }
