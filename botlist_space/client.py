"""Async client for the botlist.space API with optional in-memory caching."""

import logging
import warnings
from dataclasses import asdict

from .errors import MissingValueError
from .models import Bot, Stats, Upvote, User
from .options import (
    DEFAULT_CLIENT_OPTIONS,
    ClientOptions,
    FetchOptions,
    MultiFetchOptions,
    PostOptions,
    normalize,
    resolve_count,
    resolve_post_target,
    resolve_target,
)
from .transport import Transport

logger = logging.getLogger(__name__)


def _combine(options, kwargs):
    """Merge an options mapping with keyword overrides (keywords win)."""
    if options is None and not kwargs:
        return None
    overrides = normalize(options) if options is not None else {}
    overrides.update(normalize(kwargs))
    return overrides


def _require_id(value, name: str) -> str:
    if value is None:
        raise MissingValueError(f"{name} must be defined.")
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string.")
    return value


class Client:
    """Client for botlist.space.

    Options can be given as a mapping or a ClientOptions instance; each
    fetch method also takes per-call overrides, either as a mapping or as
    keyword arguments:

        async with Client({"bot_id": "1234", "cache": True}) as client:
            bot = await client.fetch_bot()
            raw = await client.fetch_bot(raw=True)
            await client.post_count(42, bot_token="...")
    """

    def __init__(self, options=None, *, transport: Transport | None = None):
        self.options: ClientOptions = DEFAULT_CLIENT_OPTIONS
        self.edit(options, preset=True)

        self._transport = transport or Transport()

        # Caches, filled only when the `cache` option is on
        self.bots: dict[str, Bot] = {}
        self.users: dict[str, User] = {}
        self.stats: list[Stats] = []  # oldest first

    def edit(self, options=None, preset: bool = False) -> ClientOptions:
        """Overlay ``options`` onto the current options.

        Args:
            options: Mapping (or ClientOptions) of the values to change.
            preset: Overlay onto the default options instead of the current ones.

        Returns:
            The new ClientOptions snapshot, also stored on ``self.options``.
        """
        if isinstance(options, ClientOptions):
            options = asdict(options)
        base = DEFAULT_CLIENT_OPTIONS if preset else self.options
        self.options = base.merge(options if options is not None else {})
        return self.options

    def _log(self, message: str, *args):
        if self.options.log:
            logger.info(message, *args)

    def _cache(self, store: dict, entity):
        if entity.id is None:
            logger.debug("Not caching %s without an id", type(entity).__name__)
            return
        store[entity.id] = entity
        self._log("Cached %s %s", type(entity).__name__, entity.id)

    def _bot_list(self, contents, opts: MultiFetchOptions):
        bots = [Bot.from_payload(bot) for bot in contents.get("bots") or []]
        if opts.cache:
            for bot in bots:
                self._cache(self.bots, bot)
        if opts.mapify:
            return {bot.id: bot for bot in bots if bot.id is not None}
        return contents if opts.raw else bots

    async def fetch_stats(self, options=None, **kwargs) -> Stats | dict:
        """Fetch site statistics.

        With caching on, the result is appended to ``self.stats`` and the
        oldest entries are dropped while the list holds ``stats_limit`` or more.
        """
        opts = FetchOptions.from_client(self.options).merge(_combine(options, kwargs) or {})

        self._log("Fetching statistics")
        contents = await self._transport.get("/statistics", opts.version)

        stats = Stats.from_payload(contents)
        if opts.cache:
            self.stats.append(stats)
            while len(self.stats) >= self.options.stats_limit:
                self.stats.pop(0)
        return contents if opts.raw else stats

    async def fetch_bots(self, options=None, **kwargs) -> list[Bot] | dict:
        """Fetch one page of listed bots.

        Returns a list of Bot, a dict keyed by bot ID when ``mapify`` is set,
        or the payload when ``raw`` is set. ``mapify`` takes precedence.
        """
        opts = MultiFetchOptions.from_client(self.options).merge(_combine(options, kwargs) or {})

        self._log("Fetching bots, page %s", opts.page)
        contents = await self._transport.get("/bots", opts.version, f"?page={opts.page}")
        return self._bot_list(contents, opts)

    async def fetch_all_bots(self, options=None, **kwargs):
        """Deprecated alias of :meth:`fetch_bots`."""
        warnings.warn(
            "Client.fetch_all_bots is deprecated; use Client.fetch_bots instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self.fetch_bots(options, **kwargs)

    async def fetch_bot(self, bot_id=None, options=None, **kwargs) -> Bot | dict:
        """Fetch a single bot.

        ``bot_id`` defaults to the configured ``bot_id`` and may itself be the
        options mapping.
        """
        bot_id, overrides = resolve_target(bot_id, _combine(options, kwargs), self.options.bot_id)
        _require_id(bot_id, "bot_id")
        opts = FetchOptions.from_client(self.options).merge(overrides)

        self._log("Fetching bot %s", bot_id)
        contents = await self._transport.get(f"/bots/{bot_id}", opts.version)

        if opts.cache:
            self._cache(self.bots, Bot.from_payload(contents))
        return contents if opts.raw else Bot.from_payload(contents)

    async def fetch_upvotes(self, bot_id=None, options=None, **kwargs) -> list[Upvote] | dict:
        """Fetch a page of a bot's upvotes from the past month. Needs a bot token.

        Voters are cached into ``self.users``; ``mapify`` keys the result by
        voter ID.
        """
        bot_id, overrides = resolve_target(bot_id, _combine(options, kwargs), self.options.bot_id)
        opts = MultiFetchOptions.from_client(self.options).merge(overrides)
        if not opts.bot_token:
            raise MissingValueError("bot_token must be defined.")
        _require_id(bot_id, "bot_id")

        self._log("Fetching upvotes of %s, page %s", bot_id, opts.page)
        contents = await self._transport.auth_get(
            f"/bots/{bot_id}/upvotes", opts.version, opts.bot_token, f"?page={opts.page}"
        )

        upvotes = [Upvote.from_payload(upvote) for upvote in contents.get("upvotes") or []]
        if opts.cache:
            for upvote in upvotes:
                self._cache(self.users, User.from_payload(upvote.user.raw))
        if opts.mapify:
            return {upvote.user.id: upvote for upvote in upvotes if upvote.user.id is not None}
        return contents if opts.raw else upvotes

    async def fetch_user(self, user_id=None, options=None, **kwargs) -> User | dict:
        """Fetch a user. ``user_id`` is required."""
        _require_id(user_id, "user_id")
        opts = FetchOptions.from_client(self.options).merge(_combine(options, kwargs) or {})

        self._log("Fetching user %s", user_id)
        contents = await self._transport.get(f"/users/{user_id}", opts.version)

        if opts.cache:
            self._cache(self.users, User.from_payload(contents))
        return contents if opts.raw else User.from_payload(contents)

    async def fetch_bots_of_user(self, user_id=None, options=None, **kwargs) -> list[Bot] | dict:
        """Fetch a page of the bots a user owns."""
        _require_id(user_id, "user_id")
        opts = MultiFetchOptions.from_client(self.options).merge(_combine(options, kwargs) or {})

        self._log("Fetching bots of user %s, page %s", user_id, opts.page)
        contents = await self._transport.get(f"/users/{user_id}/bots", opts.version, f"?page={opts.page}")
        return self._bot_list(contents, opts)

    async def post_count(self, bot_id=None, count_or_shards=None, options=None, **kwargs) -> dict:
        """Post a server count, or a list of per-shard counts. Needs a bot token.

        ``bot_id`` may be omitted, may be the options mapping, or may be the
        count itself:

            await client.post_count(42)           # {"server_count": 42}
            await client.post_count([10, 20, 30]) # {"shards": [10, 20, 30]}
        """
        bot_id, overrides = resolve_post_target(
            bot_id, count_or_shards, _combine(options, kwargs), self.options.bot_id
        )
        _require_id(bot_id, "bot_id")
        opts = PostOptions.from_client(self.options).merge(overrides)

        if opts.bot_token is None:
            raise MissingValueError("bot_token must be defined, or set in the client options.")
        if not isinstance(opts.bot_token, str):
            raise TypeError("bot_token must be a string.")
        body = resolve_count(opts.count_or_shards)

        self._log("Posting %s for bot %s", body, bot_id)
        return await self._transport.post(f"/bots/{bot_id}", opts.version, opts.bot_token, body)

    async def close(self):
        await self._transport.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
