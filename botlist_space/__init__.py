"""Async client for the botlist.space API.

Fetches bots, users, upvotes and statistics, posts server counts, and can
keep what it fetched in in-memory caches.
"""

from .cli import main
from .client import Client
from .errors import BotlistError, FetchError, MissingValueError, Ratelimit
from .models import Bot, PartialUser, Profile, Stats, Upvote, User
from .options import ClientOptions, FetchOptions, MultiFetchOptions, PostOptions

__all__ = [
    "main",
    "Client",
    "ClientOptions",
    "FetchOptions",
    "MultiFetchOptions",
    "PostOptions",
    "Bot",
    "PartialUser",
    "Profile",
    "Stats",
    "Upvote",
    "User",
    "BotlistError",
    "FetchError",
    "MissingValueError",
    "Ratelimit",
]

if __name__ == "__main__":
    main()
