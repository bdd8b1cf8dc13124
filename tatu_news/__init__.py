"""
Tatu News

A FastAPI app that renders Hacker News and The Verge with the linked
articles pulled in reader-mode, sanitized, summarized and cached.
"""

__version__ = "1.0.0"
