"""
VeggieFresh Admin API — Middleware Package
============================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Rate Limit] → [Access Log] → [GZip] → [CORS] → Route

    1. Request ID first: every response, 429s included, carries the correlation ID
    2. Rate Limit: rejects abusive clients before any further processing
    3. Access Log: method, path, status, duration with the request ID
"""
