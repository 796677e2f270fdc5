from ragcheck.models.result import CheckResult, CheckStatus, SuiteReport
from ragcheck.models.ollama import EmbedResponse, GenerateResponse, OllamaModel, OllamaTags, OllamaVersion
from ragcheck.models.service import HealthResponse, PluginInfo, PluginListResponse, StatusResponse

__all__ = [
    "CheckResult", "CheckStatus", "SuiteReport",
    "EmbedResponse", "GenerateResponse", "OllamaModel", "OllamaTags", "OllamaVersion",
    "HealthResponse", "PluginInfo", "PluginListResponse", "StatusResponse"
]
