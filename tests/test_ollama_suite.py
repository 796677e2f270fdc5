"""Ollama suite: availability gate, models, chat and embeddings."""

import pytest
from aiohttp import web

from conftest import json_route, text_route
from ragcheck.checks import ollama, ollama_suite
from ragcheck.models import CheckStatus
from ragcheck.runner import SmokeRunner

TAGS = {
    "models": [
        {"name": "llama3.2:1b", "size": 1321098329, "digest": "baf6a787fdff"},
        {"name": "nomic-embed-text:latest", "size": 274302450},
    ]
}


@pytest.fixture
async def fake_ollama(serve):
    requests = []

    async def generate(request: web.Request) -> web.Response:
        payload = await request.json()
        requests.append(payload)
        return web.json_response({"model": payload["model"], "response": f" echo: {payload['prompt']} ",
                                  "done": True})

    async def embed(request: web.Request) -> web.Response:
        payload = await request.json()
        requests.append(payload)
        return web.json_response({"model": payload["model"], "embeddings": [[0.01] * 768]})

    url = await serve([
        web.get("/api/version", json_route({"version": "0.5.7"})),
        web.get("/api/tags", json_route(TAGS)),
        web.post("/api/generate", generate),
        web.post("/api/embed", embed),
    ])
    return url, requests


async def test_full_run(fake_ollama, session, config):
    url, requests = fake_ollama
    lines = []
    runner = SmokeRunner(config.with_overrides(ollama_base_url=url), output=lines.append)

    report = await runner.run(ollama_suite(), session=session)

    assert report.ok
    assert report.passed == 5
    assert report.result("ollama").detail == {"version": "0.5.7"}
    assert report.result("models").lines == [
        "  - llama3.2:1b (1321098329 bytes)",
        "  - nomic-embed-text:latest (274302450 bytes)",
    ]
    assert report.result("embed").detail["dimensions"] == 768
    assert "Embedding dimensions: 768" in lines
    assert lines[-1] == "🎯 Summary: 5 passed, 0 failed, 0 skipped"

    chat_en, chat_id, embed = requests
    assert chat_en == {"model": "llama3.2:1b", "prompt": ollama.ENGLISH_PROMPT, "stream": False}
    assert chat_id["prompt"] == ollama.INDONESIAN_PROMPT
    assert embed == {"model": "nomic-embed-text", "input": ollama.EMBED_INPUT}
    assert report.result("chat_en").lines == ["English response:", f"echo: {ollama.ENGLISH_PROMPT}"]


async def test_unavailable_ollama_skips_the_rest(session, config, dead_url):
    lines = []
    runner = SmokeRunner(config.with_overrides(ollama_base_url=dead_url), output=lines.append)

    report = await runner.run(ollama_suite(), session=session)

    assert report.result("ollama").status == CheckStatus.FAILED
    assert report.result("ollama").lines == ["❌ Ollama is not available"]
    skipped = report.results[1:]
    assert all(r.status == CheckStatus.SKIPPED for r in skipped)
    assert {r.error for r in skipped} == {"skipped after ollama failed"}
    assert not any(line.startswith("2️⃣") for line in lines)
    assert lines[-1] == "🎯 Summary: 0 passed, 1 failed, 4 skipped"


async def test_chat_failure_does_not_stop_embeddings(serve, session, config):
    url = await serve([
        web.get("/api/version", json_route({"version": "0.5.7"})),
        web.get("/api/tags", json_route({"models": []})),
        web.post("/api/generate", json_route({"error": "model not found"}, status=404)),
        web.post("/api/embed", json_route({"embeddings": [[0.5, 0.25, 0.125]]})),
    ])
    runner = SmokeRunner(config.with_overrides(ollama_base_url=url), output=lambda line: None)

    report = await runner.run(ollama_suite(), session=session)

    assert report.result("models").lines == ["⚠️ No models installed"]
    assert report.result("chat_en").status == CheckStatus.FAILED
    assert report.result("chat_id").status == CheckStatus.FAILED
    assert report.result("embed").status == CheckStatus.OK
    assert report.result("embed").detail["dimensions"] == 3
    assert not report.ok


async def test_malformed_tags_fail(serve, session, config):
    url = await serve([web.get("/api/tags", text_route("not json"))])

    result = await ollama.list_models(session, config.with_overrides(ollama_base_url=url))

    assert result.status == CheckStatus.FAILED
    assert result.lines[0].startswith("❌ Could not list models")


async def test_empty_embedding_fails(serve, session, config):
    url = await serve([web.post("/api/embed", json_route({"embeddings": []}))])

    result = await ollama.embeddings(session, config.with_overrides(ollama_base_url=url))

    assert result.status == CheckStatus.FAILED
    assert result.error == "empty embeddings"


async def test_custom_models_are_sent(fake_ollama, session, config):
    url, requests = fake_ollama
    custom = config.with_overrides(ollama_base_url=url, chat_model="mistral:latest",
                                   embed_model="mxbai-embed-large")

    await ollama.english_chat(session, custom)
    await ollama.embeddings(session, custom)

    assert [r["model"] for r in requests] == ["mistral:latest", "mxbai-embed-large"]
