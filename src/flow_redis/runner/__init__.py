# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for one-shot maintenance commands.

Usage:
    python -m flow_redis.runner < input.json > output.json

Exports:
    Executor: Runs a single command against the plugin's namespace
    RunnerInput: Input schema read from stdin
    RunnerOutput: Output schema written to stdout
"""

from .executor import ExecutionError, Executor
from .schema import CommandArgsSchema, RunnerInput, RunnerOutput

__all__ = [
    "CommandArgsSchema",
    "ExecutionError",
    "Executor",
    "RunnerInput",
    "RunnerOutput",
]
