"""Running agents one after another, each fed the previous agent's output."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from termcolor import colored

logger = logging.getLogger(__name__)

UNNAMED_AGENT = "Unnamed Agent"


class _ChainAgent(Protocol):
    name: str | None
    user_prompt: str | None

    async def invoke(self) -> str: ...


@dataclass(frozen=True)
class ExecutionRecord:
    """One agent run: who ran, what went in, what came out, and when."""

    agent_name: str
    input: str
    output: str
    timestamp: datetime = field(default_factory=datetime.now)


class ExecutionRecorder(ABC):
    """Somewhere to keep a record of each agent run in a chain."""

    @abstractmethod
    def store_execution(self, agent_name: str, input: str, output: str) -> None:
        """Store one run; raising stops the chain."""


class Chain:
    """A sequence of agents where each agent's output is the next one's user prompt."""

    def __init__(self) -> None:
        self._agents: list[_ChainAgent] = []
        self._recorder: ExecutionRecorder | None = None
        self._memory_log: list[ExecutionRecord] = []

    def with_recorder(self, recorder: ExecutionRecorder) -> Chain:
        """Send every run to ``recorder`` as well as the memory log."""
        self._recorder = recorder
        return self

    def add_agent(self, agent: _ChainAgent) -> Chain:
        """Append an agent to the end of the chain."""
        self._agents.append(agent)
        logger.debug("Added agent")
        return self

    async def run(self) -> None:
        """Run every agent in order, passing each output on as the next user prompt."""
        previous_output: str | None = None
        for agent in self._agents:
            name = agent.name if agent.name is not None else UNNAMED_AGENT
            logger.info("Running Agent: %s", colored(name, "green"))

            if previous_output is not None:
                agent.user_prompt = previous_output
            user_input = agent.user_prompt or ""

            try:
                output = await agent.invoke()
            except Exception as exc:
                logger.error("Agent %s failed: %s", agent.name or "", exc)
                raise

            self._memory_log.append(
                ExecutionRecord(agent_name=name, input=user_input, output=output)
            )
            if self._recorder is not None:
                self._recorder.store_execution(name, user_input, output)

            previous_output = output

    def memory_logs(self) -> list[ExecutionRecord]:
        """A copy of the records of every run so far."""
        return list(self._memory_log)