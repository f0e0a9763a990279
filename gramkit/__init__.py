"""Building blocks for Telegram clients: peers, peer caching, keyboards, bot requests and media metadata."""

__version__ = "0.1.0"

__all__ = [
    "bots",
    "buttons",
    "cache",
    "files",
    "media",
    "peers",
]