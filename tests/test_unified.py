"""Unified suite: health, version and the fixed embeddings/chat lines."""

from aiohttp import web

from conftest import json_route, text_route
from ragcheck.checks import ollama, service, unified_suite
from ragcheck.models import CheckStatus
from ragcheck.runner import SmokeRunner

VERSION_BODY = '{"version":"0.5.7"}'


async def test_health_passes_on_any_http_status(serve, session, config):
    url = await serve([web.get("/api/plugins/rag/health", text_route("boom", status=500))])

    result = await service.rag_health(session, config.with_overrides(service_base_url=url))

    assert result.status == CheckStatus.OK
    assert result.status_code == 500
    assert result.lines == ["boom"]


async def test_health_connection_failure_prints_message(session, config, dead_url):
    result = await service.rag_health(session, config.with_overrides(service_base_url=dead_url))

    assert result.status == CheckStatus.FAILED
    assert result.lines == ["❌ Failed to connect"]
    assert result.url == f"{dead_url}/api/plugins/rag/health"
    assert result.error


async def test_version_success_keeps_source_wording(serve, session, config):
    url = await serve([web.get("/api/version", text_route(VERSION_BODY))])

    result = await ollama.version_probe(session, config.with_overrides(ollama_base_url=url))

    assert result.status == CheckStatus.OK
    assert result.lines == [VERSION_BODY, "❌ Connected to Ollama", ""]


async def test_version_without_base_url_fails_quietly(session, config):
    assert config.ollama_base_url is None

    result = await ollama.version_probe(session, config)

    assert result.status == CheckStatus.FAILED
    assert result.url == "/api/version"
    assert result.lines == ["❌ No Ollama connection", ""]


async def test_version_unreachable(session, config, dead_url):
    result = await ollama.version_probe(session, config.with_overrides(ollama_base_url=dead_url))

    assert result.status == CheckStatus.FAILED
    assert "❌ No Ollama connection" in result.lines


async def test_version_http_error_counts_as_failure(serve, session, config):
    url = await serve([web.get("/api/version", json_route({"error": "nope"}, status=404))])

    result = await ollama.version_probe(session, config.with_overrides(ollama_base_url=url))

    assert result.status == CheckStatus.FAILED
    assert result.status_code == 404
    assert "HTTP 404" in result.error


async def test_embeddings_placeholder_is_fixed_text(session, config, dead_url):
    result = await ollama.embeddings_placeholder(session, config.with_overrides(ollama_base_url=dead_url))

    assert result.status == CheckStatus.SKIPPED
    assert result.lines == [
        "✅ Embeddings generated successfully",
        "✅ Chat generated successfully!",
        "",
    ]


async def test_all_steps_run_when_everything_is_down(capsys, config, dead_url, restore_logging):
    runner = SmokeRunner(config.with_overrides(service_base_url=dead_url))

    report = await runner.run(unified_suite())

    assert [r.name for r in report.results] == ["health", "version", "embeddings"]
    assert [r.status for r in report.results] == [
        CheckStatus.FAILED, CheckStatus.FAILED, CheckStatus.SKIPPED,
    ]
    assert capsys.readouterr().out.splitlines() == [
        "🔍 Testing Unified AI Service Integration",
        "=" * 60,
        "1. Testing AI Service health check...",
        "❌ Failed to connect",
        "2. Testing available models...",
        "❌ No Ollama connection",
        "",
        "3. Testing embeddings...",
        "✅ Embeddings generated successfully",
        "✅ Chat generated successfully!",
        "",
    ]


async def test_healthy_targets(serve, session, config):
    service_url = await serve([web.get("/api/plugins/rag/health", json_route({"status": "healthy"}))])
    ollama_url = await serve([web.get("/api/version", text_route(VERSION_BODY))])
    lines = []
    runner = SmokeRunner(config.with_overrides(service_base_url=service_url, ollama_base_url=ollama_url),
                         output=lines.append)

    report = await runner.run(unified_suite(), session=session)

    assert report.ok
    assert (report.passed, report.failed, report.skipped) == (2, 0, 1)
    assert report.result("health").lines == ['{"status": "healthy"}']
    assert "🎯" not in "".join(lines)
    assert report.finished_at >= report.started_at


def raw_route(body: bytes, status: int = 200):
    async def handler(request: web.Request) -> web.Response:
        return web.Response(body=body, status=status, content_type="text/plain", charset="utf-8")
    return handler


async def test_health_undecodable_body_still_passes(serve, session, config):
    url = await serve([web.get("/api/plugins/rag/health", raw_route(b"\xff\xfe caf\xe9"))])

    result = await service.rag_health(session, config.with_overrides(service_base_url=url))

    assert result.status == CheckStatus.OK
    assert result.lines == ["�� caf�"]


async def test_version_undecodable_body_is_connected(serve, session, config):
    url = await serve([web.get("/api/version", raw_route(b"\x80version"))])

    result = await ollama.version_probe(session, config.with_overrides(ollama_base_url=url))

    assert result.status == CheckStatus.OK
    assert result.lines == ["�version", "❌ Connected to Ollama", ""]
