"""
Application Layer

Orchestrates the domain against the message bus.

Structure:
- interfaces/: Port interfaces implemented by bus adapters
- services/: The session manager and its asyncio wrapper
"""
