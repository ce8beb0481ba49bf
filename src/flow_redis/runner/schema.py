# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of the maintenance
runner: one command in on stdin, one result out on stdout.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from flow_redis.config import RedisPluginParams

Command = Literal[
    "clear_cache",
    "clear_rate_limits",
    "reset_rate_limit",
    "rate_limit_status",
    "clear_flow_store",
    "clear_trace_store",
]


class CommandArgsSchema(BaseModel):
    """Arguments for the selected command.

    Attributes:
        prefix: Cache key prefix (``clear_cache``)
        identifier: Rate limit identifier (``reset_rate_limit``,
                    ``rate_limit_status``)
        limit: Requests per window (``rate_limit_status``)
        window_seconds: Window length (``rate_limit_status``)
    """

    prefix: str | None = None
    identifier: str | None = None
    limit: int | None = None
    window_seconds: int | None = None


class RunnerInput(BaseModel):
    """Complete runner input read from stdin.

    Attributes:
        command: Maintenance command to run
        params: Plugin configuration (connection string, key prefix, ...)
        args: Command arguments
    """

    command: Command
    params: RedisPluginParams = Field(default_factory=RedisPluginParams)
    args: CommandArgsSchema = Field(default_factory=CommandArgsSchema)


class RunnerOutput(BaseModel):
    """Complete runner output written to stdout.

    The runner always outputs valid JSON matching this schema,
    even on errors.

    Attributes:
        success: Whether the command completed
        result: Command result (deleted count, rate limit status, ...)
        error: Error message (on failure)
        error_type: Error class name (on failure)
    """

    success: bool
    result: Any = None
    error: str = ""
    error_type: str = ""
