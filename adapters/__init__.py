"""
Adapters package - External service connections.
MongoDB store handle and the OpenAI chat-completion client.
"""

from adapters import mongo_adapter, openai_adapter

__all__ = [
    "mongo_adapter",
    "openai_adapter",
]
