"""autocommit — conventional commit messages from a local Ollama model."""

__version__ = "0.3.0"
