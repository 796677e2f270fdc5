"""
Checks against the RAG plugin service (backend on port 4000 by default).
"""
import aiohttp

from ragcheck.checks.common import REQUEST_ERRORS, describe_error, fetch, first_line
from ragcheck.config import SmokeConfig
from ragcheck.logging_config import get_logger
from ragcheck.models import CheckResult, HealthResponse, PluginListResponse, StatusResponse

logger = get_logger(__name__)

RAG_HEALTH_PATH = "/api/plugins/rag/health"
BACKEND_HEALTH_PATH = "/health"
PLUGINS_PATH = "/api/plugins"
RAG_STATUS_PATH = "/api/plugins/rag/status"
AI_STATUS_PATH = "/api/plugins/rag/ai/status"

TOKEN_INSTRUCTIONS = [
    "",
    "⚠️ No TOKEN provided. Skipping authenticated tests.",
    "",
    "To get a token:",
    "1. Open http://localhost:3000 in browser",
    "2. Login with your credentials",
    "3. Open browser console (F12)",
    "4. Run: localStorage.getItem('token')",
    "5. Copy the token and run: export TOKEN='<your-token>'",
    "6. Run this script again",
]


async def rag_health(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    """Reachability of the RAG plugin health route.

    Only the connection matters: any HTTP status passes and the body is echoed as is.
    """
    url = config.service_url(RAG_HEALTH_PATH)
    try:
        fetched = await fetch(session, "GET", url)
    except REQUEST_ERRORS as e:
        logger.warning(f"RAG health check could not connect to {url}: {describe_error(e)}")
        return CheckResult.failed("health", "❌ Failed to connect", url=url, error=describe_error(e))

    lines = [fetched.text] if fetched.text else []
    return CheckResult.ok("health", *lines, **fetched.record())


async def backend_health(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    url = config.service_url(BACKEND_HEALTH_PATH)
    try:
        fetched = await fetch(session, "GET", url)
        if not fetched.is_success:
            return CheckResult.failed("backend", f"❌ Backend returned HTTP {fetched.status}",
                                      error=f"HTTP {fetched.status}", **fetched.record())
        health = HealthResponse.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"Backend health check failed for {url}: {describe_error(e)}")
        return CheckResult.failed("backend", "❌ Backend is not running", url=url, error=describe_error(e))

    return CheckResult.ok("backend", "✅ Backend is running", f"   status: {health.status}",
                          **fetched.record())


async def _authenticated_status(session: aiohttp.ClientSession, config: SmokeConfig,
                                name: str, path: str) -> CheckResult:
    if not config.token:
        return CheckResult.skipped(name, "⚠️ Skipped (no TOKEN)", error="no token")

    url = config.service_url(path)
    try:
        fetched = await fetch(session, "GET", url, headers=config.auth_headers())
        if fetched.is_http_error:
            return CheckResult.failed(name, f"❌ HTTP {fetched.status}: {first_line(fetched.text)}",
                                      error=f"HTTP {fetched.status}", **fetched.record())
        status = StatusResponse.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"{name} check failed for {url}: {describe_error(e)}")
        return CheckResult.failed(name, f"❌ {describe_error(e)}", url=url, error=describe_error(e))

    lines = [f"   {key}: {value}" for key, value in (status.data or {}).items()]
    return CheckResult.ok(name, "✅ OK", *lines, **fetched.record())


async def plugin_list(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    if not config.token:
        return CheckResult.skipped("plugins", *TOKEN_INSTRUCTIONS, error="no token")

    url = config.service_url(PLUGINS_PATH)
    try:
        fetched = await fetch(session, "GET", url, headers=config.auth_headers())
        if fetched.is_http_error:
            return CheckResult.failed("plugins", f"❌ HTTP {fetched.status}: {first_line(fetched.text)}",
                                      error=f"HTTP {fetched.status}", **fetched.record())
        plugins = PluginListResponse.model_validate_json(fetched.text)
    except REQUEST_ERRORS as e:
        logger.warning(f"Plugin list failed for {url}: {describe_error(e)}")
        return CheckResult.failed("plugins", f"❌ {describe_error(e)}", url=url, error=describe_error(e))

    lines = ["📋 Plugins:"]
    for plugin in plugins.data:
        capabilities = ", ".join(str(c) for c in plugin.capabilities) or "-"
        lines.append(f"  - {plugin.id} ({plugin.name or '?'}) status={plugin.status or '?'} "
                     f"capabilities={capabilities}")
    return CheckResult.ok("plugins", *lines, detail={"count": len(plugins.data)}, **fetched.record())


async def rag_status(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    return await _authenticated_status(session, config, "rag_status", RAG_STATUS_PATH)


async def ai_status(session: aiohttp.ClientSession, config: SmokeConfig) -> CheckResult:
    return await _authenticated_status(session, config, "ai_status", AI_STATUS_PATH)
