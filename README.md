# pyano

Building blocks for AI applications that talk to a locally running
llama.cpp-style completion server (one that answers `POST /completion`).

## What is in the package

- `pyano.options.LLMHTTPCallOptions` – sampling settings (temperature,
  defaulting to 0.4, `top_k`, `top_p`, `seed`, `min_length`, `max_length`,
  `repetition_penalty`), the server URL and a prompt template.
  Giving `port` sets `server_url` to `http://localhost:<port>`.
  `validate()` raises `ValueError` unless both a server URL and a prompt
  template are set; `render_prompt()` fills the `{system_prompt}` and
  `{user_prompt}` placeholders; `payload()` builds the request body.
- `pyano.llm.LLM` – an async HTTP client for the completion endpoint.
  `response()` returns the server's JSON reply; `response_stream()` returns
  the body as an async iterator of bytes, passed through an optional
  `process_response` function. Close it with `aclose()` or use it as an
  async context manager.
- `pyano.stream_processing` – `llamacpp_process_stream` (and the identical
  `qwen_process_stream`) turns the server's `data: {...}` lines into the
  plain `content` text, yielding empty bytes for chunks without content, and
  logs the tokens-per-second figure when the server reports its timings.
  `process_chunk` and `calculate_tokens_per_second` are available on their
  own.
- `pyano.agent.Agent` – a system prompt, a user prompt and an `LLM`
  (all three required, otherwise `ValueError`). `invoke()` sends the prompts
  and prints the reply. Without streaming it returns the reply's `content`.
  With `stream=True` it prints the reply token by token (pausing
  `token_delay` seconds, 0.05 by default, after each) between
  "Response begin" / "Response ends" banners; the returned string holds each
  chunk's tokens followed by the chunk itself once more. `get_tools()`
  describes any attached tools inside `<tools>` tags. `split_tokens()` is the
  tokenizer used for printing.
- `pyano.chain.Chain` – runs agents in order, setting each agent's user
  prompt to the previous agent's output, and keeps an `ExecutionRecord`
  (agent name, input, output, timestamp) of every run, returned by
  `memory_logs()`. An `ExecutionRecorder` subclass passed to
  `with_recorder()` receives every run as well.
- `pyano.embedding_models.EmbeddingModel` – the supported embedding models
  (`TextEmbeddingModel.MINILM_V6`, `MINILM_V12`, `ImageEmbeddingModel.CLIP`)
  with their download URL, the files each needs, their local directory under
  the home directory and their vector dimensions.
- `pyano.errors` – the exception classes listed below.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Downloading a model

```
pyano-pull <model_url> [--quant <quant>]
```

The file is saved under `$MODEL_HOME` (default `./pyano_home/models`), in a
directory named after the part of the file name before its first dash, with
the quantisation as a sub-directory when given. A `.env` file is read first.
A progress bar is shown while downloading.

## Chaining agents

```python
import asyncio

from pyano.agent import Agent
from pyano.chain import Chain
from pyano.llm import LLM
from pyano.options import LLMHTTPCallOptions
from pyano.stream_processing import llamacpp_process_stream

TEMPLATE = (
    "<|start_header_id|>system<|end_header_id|>\n{system_prompt}<|eot_id|>"
    "<|start_header_id|>user<|end_header_id|>\n{user_prompt}<|eot_id|>"
    "<|start_header_id|>assistant<|end_header_id|>\n"
)


async def main():
    options = LLMHTTPCallOptions(
        server_url="http://localhost:52555",
        prompt_template=TEMPLATE,
        temperature=0.7,
    )
    async with LLM(options, process_response=llamacpp_process_stream) as llm:
        writer = Agent(
            name="Content Generator Agent",
            system_prompt="You are an excellent content generator.",
            user_prompt="Generate content on the topic - Future of AI agents",
            llm=llm,
        )
        summarizer = Agent(
            name="Summarizer Agent",
            system_prompt="You are a summarizer for generated content.",
            user_prompt="Summarize the content.",
            llm=llm,
        )

        chain = Chain().add_agent(writer).add_agent(summarizer)
        await chain.run()
        for record in chain.memory_logs():
            print(record.agent_name, record.timestamp)


asyncio.run(main())
```

## Errors

- `LLMError` is the base for request failures: `RequestFailedError` when a
  request cannot be sent or gets a 4xx reply, `ServerUnavailableError` for a
  5xx reply, and `UnexpectedError` when a non-streamed reply is not valid JSON.
- `EmbedderError` is the base of `InitializationFailedError` and
  `EmbeddingGenerationFailedError`.

## What the package does not do

- It does not start, load or manage model servers; the completion server
  must already be running at the configured URL.
- It describes embedding models but does not download them or compute
  embeddings.
- It has no vector store or other storage; chain records are kept in memory
  unless you supply your own `ExecutionRecorder`.