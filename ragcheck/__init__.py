"""Smoke-test runner for the RAG plugin service and Ollama."""

__version__ = "1.0.0"
