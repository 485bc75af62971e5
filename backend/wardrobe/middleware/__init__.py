"""
Wardrobe Backend — Middleware Package
======================================

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [Upload Limit] → [GZip] → [CORS] → Route Handler

    Request ID runs first so every later log line carries the id; the access
    log sees 413 rejections from the upload limit like any other response.
"""
