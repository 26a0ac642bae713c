"""Infrastructure layer — git subprocess wrapper and Ollama HTTP client.

This layer depends on stdlib and third-party libs (httpx).
It must never import from services, commands, or output.
"""
