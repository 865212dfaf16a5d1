"""Space trading and mining game engine, with aiohttp HTTP JSON endpoints."""

__version__ = "0.1.0"