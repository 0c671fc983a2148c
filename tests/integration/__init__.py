"""Integration tests for components working together as a system.

Coverage:
    - Upload validation and the automatic analysis turn
    - Question answering, provider fallback and demo mode over HTTP
    - Session inspection and clearing

Runs the real FastAPI app through httpx ASGITransport. Only the provider
clients are replaced.
"""
