"""
Checks against an Ollama model server.
"""
import aiohttp

from ragcheck.checks.common import REQUEST_ERRORS, describe_error, fetch, first_line
from ragcheck.config import DEFAULT_OLLAMA_BASE_URL, SmokeConfig
from ragcheck.logging_config import get_logger
from ragcheck.models import CheckResult, CheckStatus, EmbedResponse, GenerateResponse, OllamaTags, OllamaVersion

logger = get_logger(__name__)

VERSION_PATH = "/api/version"
TAGS_PATH = "/api/tags"
GENERATE_PATH = "/api/generate"
EMBED_PATH = "/api/embed"

ENGLISH_PROMPT = "What is artificial intelligence? Answer in one sentence."
INDONESIAN_PROMPT = "Apa itu kecerdasan buatan? Jawab dalam satu kalimat."
EMBED_INPUT = "This is a test document for RAG."

# Wording of the unified script kept verbatim, including the success branch
CONNECTED_MESSAGE = "❌ Connected to Ollama"
NOT_CONNECTED_MESSAGE = "❌ No Ollama connection"
EMBEDDINGS_MESSAGE = "✅ Embeddings generated successfully"
CHAT_MESSAGE = "✅ Chat generated successfully!"


class OllamaHTTPError(aiohttp.ClientError):
    """Non-2xx reply treated as a failed transfer"""
    def __init__(self, url: str, status: int, body: str = ""):
        self.url = url
        self.status = status
        detail = first_line(body)
        super().__init__(f"HTTP {status} from {url}: {detail}" if detail else f"HTTP {status} from {url}")


async def _fetch_ok(session: aiohttp.ClientSession, method: str, url: str, json: dict = None):
    fetched = await fetch(session, method, url, json=json)
    if fetched.is_http_error:
        raise OllamaHTTPError(url, fetched.status, fetched.text)
    return fetched


async def version_probe(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    """GET {OLLAMA_BASE_URL}/api/version with no fallback base URL.

    An unset OLLAMA_BASE_URL yields a relative URL that the client refuses,
    which lands in the failure branch.
    """
    url = config.ollama_url(VERSION_PATH)
    try:
        fetched = await _fetch_ok(session, "GET", url)
    except REQUEST_ERRORS as e:
        logger.warning(f"Ollama version probe failed for {url!r}: {describe_error(e)}")
        status_code = e.status if isinstance(e, OllamaHTTPError) else None
        return CheckResult.failed("version", NOT_CONNECTED_MESSAGE, "",
                                  url=url, status_code=status_code, error=describe_error(e))

    lines = [fetched.text] if fetched.text else []
    return CheckResult.ok("version", *lines, CONNECTED_MESSAGE, "", **fetched.record())


async def embeddings_placeholder(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    """Fixed success lines; nothing is requested, so the step counts as skipped."""
    return CheckResult.skipped("embeddings", EMBEDDINGS_MESSAGE, CHAT_MESSAGE, "",
                               error="no request performed")


async def ollama_available(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    url = config.ollama_url(VERSION_PATH, fallback=DEFAULT_OLLAMA_BASE_URL)
    try:
        fetched = await _fetch_ok(session, "GET", url)
        version = OllamaVersion.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.error(f"Ollama is not available at {url}: {describe_error(e)}")
        return CheckResult.failed("ollama", "❌ Ollama is not available", url=url, error=describe_error(e))

    return CheckResult.ok("ollama", f"✅ Ollama is running: {fetched.text.strip()}",
                          detail={"version": version.version}, **fetched.record())


async def list_models(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    url = config.ollama_url(TAGS_PATH, fallback=DEFAULT_OLLAMA_BASE_URL)
    try:
        fetched = await _fetch_ok(session, "GET", url)
        tags = OllamaTags.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"Listing Ollama models failed: {describe_error(e)}")
        return CheckResult.failed("models", f"❌ Could not list models: {describe_error(e)}",
                                  url=url, error=describe_error(e))

    if not tags.models:
        return CheckResult.ok("models", "⚠️ No models installed", detail={"models": []}, **fetched.record())

    lines = [f"  - {model.name} ({model.size if model.size is not None else '?'} bytes)"
             for model in tags.models]
    return CheckResult.ok("models", *lines, detail={"models": [m.name for m in tags.models]},
                          **fetched.record())


async def _generate(session: aiohttp.ClientSession, config: SmokeConfig,
                    name: str, label: str, prompt: str) -> CheckResult:
    url = config.ollama_url(GENERATE_PATH, fallback=DEFAULT_OLLAMA_BASE_URL)
    payload = {"model": config.chat_model, "prompt": prompt, "stream": False}
    try:
        fetched = await _fetch_ok(session, "POST", url, json=payload)
        generated = GenerateResponse.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"{label} chat with {config.chat_model} failed: {describe_error(e)}")
        return CheckResult.failed(name, f"❌ {label} chat failed: {describe_error(e)}",
                                  url=url, error=describe_error(e))

    return CheckResult.ok(name, f"{label} response:", generated.response.strip(),
                          detail={"model": config.chat_model}, **fetched.record())


async def english_chat(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    return await _generate(session, config, "chat_en", "English", ENGLISH_PROMPT)


async def indonesian_chat(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    return await _generate(session, config, "chat_id", "Indonesian", INDONESIAN_PROMPT)


async def embeddings(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    url = config.ollama_url(EMBED_PATH, fallback=DEFAULT_OLLAMA_BASE_URL)
    payload = {"model": config.embed_model, "input": EMBED_INPUT}
    try:
        fetched = await _fetch_ok(session, "POST", url, json=payload)
        embedded = EmbedResponse.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"Embedding with {config.embed_model} failed: {describe_error(e)}")
        return CheckResult.failed("embed", f"❌ Embedding failed: {describe_error(e)}",
                                  url=url, error=describe_error(e))

    if embedded.dimensions == 0:
        return CheckResult.failed("embed", "❌ Embedding response was empty",
                                  error="empty embeddings", **fetched.record())

    return CheckResult.ok("embed", f"Embedding dimensions: {embedded.dimensions}",
                          detail={"dimensions": embedded.dimensions, "model": config.embed_model},
                          **fetched.record())


async def ollama_host(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    available = await ollama_available(session, config)
    if available.status != CheckStatus.OK:
        return available.model_copy(update={"name": "ollama_host"})

    models = await list_models(session, config)
    lines = ["✅ Ollama is available on host", "", "📦 Available models:", *models.lines]
    return available.model_copy(update={
        "name": "ollama_host",
        "status": models.status,
        "lines": lines,
        "detail": {**available.detail, **models.detail},
        "error": models.error,
    })
