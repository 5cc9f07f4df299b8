"""Application services: the session manager and its asyncio wrapper."""
