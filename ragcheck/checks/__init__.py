from ragcheck.checks import ollama, service
from ragcheck.runner import Step, Suite

BANNER_RULE = "=" * 60


def unified_suite() -> Suite:
    """Three unconditional steps; no step is required and no summary is printed."""
    return Suite(
        name="unified",
        banner=["🔍 Testing Unified AI Service Integration", BANNER_RULE],
        steps=[
            Step("health", "1. Testing AI Service health check...", service.rag_health),
            Step("version", "2. Testing available models...", ollama.version_probe),
            Step("embeddings", "3. Testing embeddings...", ollama.embeddings_placeholder),
        ],
        summary=False,
    )


def ollama_suite() -> Suite:
    return Suite(
        name="ollama",
        banner=["🧪 Testing RAG Plugin with Ollama..."],
        steps=[
            Step("ollama", "1️⃣ Testing Ollama availability...", ollama.ollama_available, required=True),
            Step("models", "2️⃣ Listing available models...", ollama.list_models),
            Step("chat_en", "3️⃣ Testing English chat...", ollama.english_chat),
            Step("chat_id", "4️⃣ Testing Indonesian (Bahasa Indonesia) chat...", ollama.indonesian_chat),
            Step("embed", "5️⃣ Testing embedding model...", ollama.embeddings),
        ],
        spaced=True,
    )


def plugin_suite() -> Suite:
    return Suite(
        name="plugin",
        banner=["🧪 Testing RAG Plugin Integration..."],
        steps=[
            Step("backend", "1️⃣ Checking backend status...", service.backend_health, required=True),
            Step("plugins", "2️⃣ Checking plugin list (requires auth)...", service.plugin_list),
            Step("rag_status", "🧠 Testing RAG plugin status...", service.rag_status),
            Step("ai_status", "🤖 Checking AI providers...", service.ai_status),
            Step("ollama_host", "3️⃣ Testing Ollama (host)...", ollama.ollama_host),
        ],
        spaced=True,
    )


SUITES = {
    "unified": unified_suite,
    "ollama": ollama_suite,
    "plugin": plugin_suite,
}


def get_suite(name: str) -> Suite:
    try:
        return SUITES[name]()
    except KeyError:
        raise ValueError(f"Unknown suite {name!r}; choose from {', '.join(SUITES)}") from None

