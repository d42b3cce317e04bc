"""
Command Session

Owns the API client, configuration and resolver cache for one CLI
invocation and runs executors against them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
import typer

from src.cli.output import OutputFormat, render_error, render_result
from src.productive_api import ProductiveApi, ProductiveApiError, ProductiveConfig, load_config
from src.productive_core.context import ExecutorContext, from_command_context
from src.productive_core.executors import ExecutorResult, ExecutorValidationError
from src.productive_core.resolution import (
    RedisResolverCache,
    ResolveError,
    ResolverCache,
    create_resolver_cache,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
O = TypeVar("O")

# Errors reported to the user as a message plus exit status 1
USER_ERRORS = (ResolveError, ExecutorValidationError, ProductiveApiError, httpx.HTTPError)


@dataclass
class CliState:
    """Global options, stored on the typer context object."""

    output_format: OutputFormat = OutputFormat.HUMAN
    token: str | None = None
    org_id: str | None = None
    user_id: str | None = None
    base_url: str | None = None
    strict: bool = False
    no_resolve: bool = False
    verbose: bool = False

    def load_config(self) -> ProductiveConfig:
        """Environment configuration with command-line flags applied on top."""
        overrides: dict[str, Any] = {
            "api_token": self.token,
            "org_id": self.org_id,
            "user_id": self.user_id,
            "base_url": self.base_url,
        }
        if self.strict:
            overrides["resolve_strict"] = True
        if self.no_resolve:
            overrides["resolution_enabled"] = False
        return load_config().with_overrides(**overrides)


def create_api(config: ProductiveConfig) -> ProductiveApi:
    return ProductiveApi.from_config(config)


class CommandSession:
    """
    Human-facing session: one API client and resolver cache per invocation.

    Satisfies CommandContextLike, so `from_command_context` can build the
    ExecutorContext from it.
    """

    def __init__(
        self,
        config: ProductiveConfig,
        api: ProductiveApi | None = None,
        resolver_cache: ResolverCache | None = None,
    ):
        self._config = config
        self._api = api if api is not None else create_api(config)
        self._resolver_cache = (
            resolver_cache if resolver_cache is not None else create_resolver_cache(config)
        )

    @property
    def api(self) -> ProductiveApi:
        return self._api

    @property
    def config(self) -> ProductiveConfig:
        return self._config

    @property
    def resolver_cache(self) -> ResolverCache | None:
        return self._resolver_cache

    def executor_context(self) -> ExecutorContext:
        return from_command_context(self)

    async def close(self) -> None:
        await self._api.close()
        if isinstance(self._resolver_cache, RedisResolverCache):
            await self._resolver_cache.close()


def get_state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState()


async def _execute(
    state: CliState,
    executor: Callable[[O, ExecutorContext], Awaitable[ExecutorResult[T]]],
    options: O,
) -> ExecutorResult[T]:
    session = CommandSession(state.load_config())
    try:
        return await executor(options, session.executor_context())
    finally:
        await session.close()


def run_executor(
    ctx: typer.Context,
    executor: Callable[[O, ExecutorContext], Awaitable[ExecutorResult[T]]],
    options: O,
) -> ExecutorResult[T]:
    """
    Run an executor for a command.

    User-facing errors are printed to stderr and exit with status 1.
    """
    state = get_state(ctx)
    try:
        return asyncio.run(_execute(state, executor, options))
    except USER_ERRORS as e:
        logger.debug(f"Command failed: {e!r}")
        render_error(e)
        raise typer.Exit(1) from e


def execute_command(
    ctx: typer.Context,
    executor: Callable[[O, ExecutorContext], Awaitable[ExecutorResult[T]]],
    options: O,
    title: str | None = None,
) -> ExecutorResult[T]:
    """Run an executor and render its result in the selected format."""
    result = run_executor(ctx, executor, options)
    render_result(result, get_state(ctx).output_format, title)
    return result
