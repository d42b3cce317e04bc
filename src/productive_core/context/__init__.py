"""Executor context and its construction paths."""

from src.productive_core.context.executor_context import (
    CommandContextLike,
    ExecutorConfig,
    ExecutorContext,
    HandlerContextLike,
    create_test_context,
    from_command_context,
    from_handler_context,
)

__all__ = [
    "CommandContextLike",
    "ExecutorConfig",
    "ExecutorContext",
    "HandlerContextLike",
    "create_test_context",
    "from_command_context",
    "from_handler_context",
]
