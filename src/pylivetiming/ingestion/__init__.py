"""Ingestion layer.

Adapters that turn deserialized feed messages into typed patches and hand
them to the session state.
"""

__all__: list[str] = []
