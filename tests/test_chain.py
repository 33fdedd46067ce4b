from __future__ import annotations

import pytest

from pyano.agent import Agent
from pyano.chain import Chain, ExecutionRecord, ExecutionRecorder


class EchoLLM:
    """Answers every prompt with the prompt itself, marked."""

    async def response(self, prompt_with_context, system_prompt):
        return {"content": f"echo:{prompt_with_context}"}


class FailingLLM:
    async def response(self, prompt_with_context, system_prompt):
        raise RuntimeError("boom")


class ListRecorder(ExecutionRecorder):
    def __init__(self):
        self.calls = []

    def store_execution(self, agent_name, input, output):
        self.calls.append((agent_name, input, output))


class RejectingRecorder(ExecutionRecorder):
    def store_execution(self, agent_name, input, output):
        raise OSError("storage full")


def make_agent(name, user_prompt="start", llm=None):
    return Agent(
        system_prompt="system",
        user_prompt=user_prompt,
        llm=llm or EchoLLM(),
        name=name,
        token_delay=0,
    )


@pytest.mark.asyncio
async def test_output_becomes_next_user_prompt():
    first = make_agent("first", "start")
    second = make_agent("second", "ignored")
    chain = Chain().add_agent(first).add_agent(second)
    await chain.run()
    logs = chain.memory_logs()
    assert [(r.agent_name, r.input, r.output) for r in logs] == [
        ("first", "start", "echo:start"),
        ("second", "echo:start", "echo:echo:start"),
    ]
    assert second.user_prompt == "echo:start"


@pytest.mark.asyncio
async def test_unnamed_agent_is_logged_with_placeholder_name():
    chain = Chain().add_agent(make_agent(None, "hi"))
    await chain.run()
    assert chain.memory_logs()[0].agent_name == "Unnamed Agent"


@pytest.mark.asyncio
async def test_recorder_receives_each_run():
    recorder = ListRecorder()
    chain = (
        Chain()
        .with_recorder(recorder)
        .add_agent(make_agent("a", "x"))
        .add_agent(make_agent("b"))
    )
    await chain.run()
    assert recorder.calls == [
        ("a", "x", "echo:x"),
        ("b", "echo:x", "echo:echo:x"),
    ]


@pytest.mark.asyncio
async def test_recorder_error_stops_chain():
    chain = Chain().with_recorder(RejectingRecorder()).add_agent(make_agent("a")).add_agent(
        make_agent("b")
    )
    with pytest.raises(OSError, match="storage full"):
        await chain.run()
    assert [r.agent_name for r in chain.memory_logs()] == ["a"]


@pytest.mark.asyncio
async def test_failing_agent_raises_and_stops():
    chain = (
        Chain()
        .add_agent(make_agent("ok", "go"))
        .add_agent(make_agent("bad", llm=FailingLLM()))
        .add_agent(make_agent("never"))
    )
    with pytest.raises(RuntimeError, match="boom"):
        await chain.run()
    assert [r.agent_name for r in chain.memory_logs()] == ["ok"]


@pytest.mark.asyncio
async def test_empty_chain_has_no_logs():
    chain = Chain()
    await chain.run()
    assert chain.memory_logs() == []


@pytest.mark.asyncio
async def test_memory_logs_returns_a_copy():
    chain = Chain().add_agent(make_agent("a"))
    await chain.run()
    logs = chain.memory_logs()
    logs.clear()
    assert len(chain.memory_logs()) == 1


@pytest.mark.asyncio
async def test_timestamps_are_in_order():
    chain = Chain().add_agent(make_agent("a")).add_agent(make_agent("b")).add_agent(
        make_agent("c")
    )
    await chain.run()
    stamps = [r.timestamp for r in chain.memory_logs()]
    assert stamps == sorted(stamps)
    assert len(stamps) == 3


def test_execution_record_fields():
    record = ExecutionRecord(agent_name="n", input="i", output="o")
    assert (record.agent_name, record.input, record.output) == ("n", "i", "o")