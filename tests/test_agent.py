import pytest

from pyano.agent import Agent, split_tokens
from pyano.errors import RequestFailedError


class FakeLLM:
    def __init__(self, chunks=(), reply=None, fail_after=None):
        self.chunks = list(chunks)
        self.reply = reply
        self.fail_after = fail_after
        self.calls = []

    async def response_stream(self, prompt_with_context, system_prompt):
        self.calls.append(("stream", prompt_with_context, system_prompt))

        async def gen():
            for index, chunk in enumerate(self.chunks):
                if self.fail_after is not None and index >= self.fail_after:
                    raise RequestFailedError("connection reset")
                yield chunk

        return gen()

    async def response(self, prompt_with_context, system_prompt):
        self.calls.append(("once", prompt_with_context, system_prompt))
        return self.reply


class FakeTool:
    def __init__(self, name, description, parameters):
        self._name = name
        self._description = description
        self._parameters = parameters

    def name(self):
        return self._name

    def description(self):
        return self._description

    def parameters(self):
        return self._parameters


def make_agent(llm, **kwargs):
    return Agent(system_prompt="sys", user_prompt="user", llm=llm, token_delay=0, **kwargs)


def test_split_tokens_words_and_punctuation():
    assert split_tokens("Hello, world!") == ["Hello", ",", " ", "world", "!"]


def test_split_tokens_keeps_apostrophes_in_words():
    assert split_tokens("don't stop") == ["don't", " ", "stop"]


@pytest.mark.parametrize("text", ["", "a  b\n\tc", "x-y_z 42!", "héllo wörld"])
def test_split_tokens_round_trip(text):
    assert "".join(split_tokens(text)) == text


def test_llm_is_required():
    with pytest.raises(ValueError, match="LLM"):
        Agent(system_prompt="s", user_prompt="u")


def test_user_prompt_is_required():
    with pytest.raises(ValueError, match="User prompt"):
        Agent(system_prompt="s", llm=FakeLLM())


def test_system_prompt_is_required():
    with pytest.raises(ValueError, match="System prompt"):
        Agent(user_prompt="u", llm=FakeLLM())


@pytest.mark.asyncio
async def test_invoke_without_stream_returns_content(capsys):
    llm = FakeLLM(reply={"content": "answer"})
    result = await make_agent(llm).invoke()
    assert result == "answer"
    assert llm.calls == [("once", "user", "sys")]
    assert "Response: answer" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_invoke_without_content_reports_error(capsys):
    result = await make_agent(FakeLLM(reply={"other": 1})).invoke()
    assert result == ""
    assert "`content` field is missing" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_streaming_collects_tokens_then_chunk(capsys):
    chunks = [b"ab c", b"d"]
    llm = FakeLLM(chunks=chunks)
    result = await make_agent(llm, stream=True).invoke()
    assert result == "".join(c.decode() * 2 for c in chunks)
    assert llm.calls == [("stream", "user", "sys")]
    out = capsys.readouterr().out
    assert "====Response begin====" in out
    assert "====Response ends====" in out
    assert out.index("====Response begin====") < out.index("ab c") < out.index("====Response ends====")


@pytest.mark.asyncio
async def test_streaming_without_chunks_prints_no_banner(capsys):
    result = await make_agent(FakeLLM(chunks=[]), stream=True).invoke()
    assert result == ""
    assert "====Response" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_streaming_error_keeps_partial_output(capsys):
    llm = FakeLLM(chunks=[b"first", b"second"], fail_after=1)
    result = await make_agent(llm, stream=True).invoke()
    assert result == "firstfirst"
    captured = capsys.readouterr()
    assert "Error streaming response" in captured.err
    assert "====Response ends====" in captured.out


def test_get_tools_without_tools():
    assert make_agent(FakeLLM()).get_tools() == "<tools>\n</tools>"


def test_get_tools_lists_each_tool():
    tools = [
        FakeTool("search", "Find pages.", '{"query":"string"}'),
        FakeTool("scrape", "Read pages.", '{"urls":"array"}'),
    ]
    text = make_agent(FakeLLM(), tools=tools).get_tools()
    lines = text.split("\n")
    assert lines[0] == "<tools>"
    assert lines[-1] == "</tools>"
    assert lines[1] == '{"name":"search","description":"Find pages.","parameters":{"query":"string"}}'
    assert len(lines) == 4