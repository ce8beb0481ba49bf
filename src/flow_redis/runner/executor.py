# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for maintenance commands.

Orchestrates one command:
1. Build and connect a RedisPlugin from the input params
2. Dispatch the command
3. Return a structured result
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from flow_redis import RedisPlugin

from .schema import CommandArgsSchema, RunnerInput, RunnerOutput


class ExecutionError(Exception):
    """Raised when a command is missing required arguments."""

    pass


class Executor:
    """Runs maintenance commands against the plugin's Redis namespace.

    The executor is designed for dependency injection to support testing.
    Pass an initialized plugin to the constructor to skip connecting.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with a fake connection:
        plugin = RedisPlugin()
        await plugin.initialize(fake_redis)
        executor = Executor(plugin=plugin)
    """

    def __init__(self, plugin: RedisPlugin | None = None) -> None:
        self._injected_plugin = plugin

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Run the command, converting every failure into a RunnerOutput error."""
        try:
            result = await self._execute_internal(input_data)
        except Exception as e:
            return RunnerOutput(
                success=False,
                error=str(e),
                error_type=type(e).__name__,
            )
        return RunnerOutput(success=True, result=result)

    async def _execute_internal(self, input_data: RunnerInput) -> Any:
        """Internal execution logic.

        Separated from execute() to allow exception propagation
        for testing while execute() catches all errors.
        """
        plugin = self._injected_plugin
        owns_plugin = plugin is None
        if plugin is None:
            plugin = RedisPlugin(input_data.params)
            await plugin.initialize()

        try:
            return await self._dispatch(plugin, input_data.command, input_data.args)
        finally:
            if owns_plugin:
                await plugin.close()

    async def _dispatch(self, plugin: RedisPlugin, command: str, args: CommandArgsSchema) -> Any:
        if command == "clear_cache":
            return {"deleted": await plugin.clear_cache(args.prefix)}
        if command == "clear_rate_limits":
            return {"deleted": await plugin.clear_rate_limits()}
        if command == "clear_flow_store":
            return {"deleted": await plugin.clear_flow_store()}
        if command == "clear_trace_store":
            return {"deleted": await plugin.clear_trace_store()}
        if command == "reset_rate_limit":
            await plugin.reset_rate_limit(self._require(args.identifier, "identifier", command))
            return None
        if command == "rate_limit_status":
            status = await plugin.rate_limit_with_status(
                self._require(args.identifier, "identifier", command),
                self._require(args.limit, "limit", command),
                self._require(args.window_seconds, "window_seconds", command),
            )
            return asdict(status)
        raise ExecutionError(f"Unknown command '{command}'")

    @staticmethod
    def _require(value: Any, name: str, command: str) -> Any:
        if value is None:
            raise ExecutionError(f"Command '{command}' requires '{name}'")
        return value
