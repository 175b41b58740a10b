"""Option snapshots for the client and for each call.

Every options object is an immutable snapshot. A new snapshot is produced by
overlaying a mapping of overrides onto a base snapshot: a key that is present
wins (even when its value is None), a missing key inherits the base value, and
the string "none" explicitly unsets the field.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields

from .errors import MissingValueError

NONE = "none"

# camelCase spellings used by the service's documentation
ALIASES = {
    "botID": "bot_id",
    "botId": "bot_id",
    "botToken": "bot_token",
    "userToken": "user_token",
    "cacheUpdateTimer": "cache_update_timer",
    "statsLimit": "stats_limit",
    "countOrShards": "count_or_shards",
}

_FALSE_WHEN_UNSET = {"cache", "log", "raw", "mapify"}
_NULL_WHEN_UNSET = {"token", "bot_id", "bot_token", "user_token", "count_or_shards"}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize(new) -> dict:
    """Validate an overrides mapping and translate camelCase keys."""
    if not isinstance(new, Mapping):
        raise TypeError("options must be a mapping.")
    return {ALIASES.get(key, key): value for key, value in new.items()}


def _unset(name: str, base):
    if name in _FALSE_WHEN_UNSET:
        return False
    if name in _NULL_WHEN_UNSET:
        return None
    # Numeric settings cannot be unset, they keep the base value
    return getattr(base, name)


def merge_options(cls, new, base):
    """Overlay ``new`` onto ``base`` and return a checked ``cls`` instance."""
    values = normalize(new)
    names = [f.name for f in fields(cls)]
    unknown = set(values) - set(names)
    if unknown:
        raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    merged = {}
    for name in names:
        if name not in values:
            merged[name] = getattr(base, name)
        elif isinstance(values[name], str) and values[name] == NONE:
            merged[name] = _unset(name, base)
        else:
            merged[name] = values[name]

    result = cls(**merged)
    result.check()
    return result


def _require(condition: bool, message: str):
    if not condition:
        raise TypeError(message)


def _check_bools(options, *names):
    for name in names:
        _require(isinstance(getattr(options, name), bool), f"{name} must be a boolean.")


def _check_optional_strings(options, *names):
    for name in names:
        value = getattr(options, name)
        _require(value is None or isinstance(value, str), f"{name} must be a string.")


def _check_version(options):
    _require(_is_int(options.version) and options.version >= 1, "version must be a positive integer.")


@dataclass(frozen=True)
class ClientOptions:
    """Options supplied when the client is created or edited."""

    cache: bool = False
    token: str | None = None
    bot_id: str | None = None
    log: bool = False
    # Milliseconds; informational only, nothing refreshes the cache on a timer
    cache_update_timer: float = 180_000
    version: int = 1
    stats_limit: int = 4
    bot_token: str | None = None
    user_token: str | None = None

    @property
    def effective_bot_token(self) -> str | None:
        """The token used for bot-authenticated routes."""
        return self.bot_token or self.token

    def merge(self, new) -> "ClientOptions":
        return merge_options(ClientOptions, new, self)

    def check(self):
        _check_bools(self, "cache", "log")
        _check_optional_strings(self, "token", "bot_id", "bot_token", "user_token")
        _check_version(self)
        _require(
            _is_number(self.cache_update_timer) and self.cache_update_timer >= 0,
            "cache_update_timer must be a non-negative number.",
        )
        _require(_is_int(self.stats_limit) and self.stats_limit >= 1, "stats_limit must be a positive integer.")


DEFAULT_CLIENT_OPTIONS = ClientOptions()


@dataclass(frozen=True)
class FetchOptions:
    """Options for a call that fetches a single entity."""

    cache: bool = False
    raw: bool = False
    version: int = 1
    user_token: str | None = None
    bot_token: str | None = None

    @classmethod
    def from_client(cls, options: ClientOptions):
        return cls(
            cache=options.cache,
            version=options.version,
            user_token=options.user_token,
            bot_token=options.effective_bot_token,
        )

    def merge(self, new):
        return merge_options(type(self), new, self)

    def check(self):
        _check_bools(self, "cache", "raw")
        _check_optional_strings(self, "user_token", "bot_token")
        _check_version(self)


@dataclass(frozen=True)
class MultiFetchOptions(FetchOptions):
    """Options for a paged call that fetches a list of entities."""

    mapify: bool = False
    page: int = 1

    def check(self):
        super().check()
        _check_bools(self, "mapify")
        _require(_is_int(self.page), "page must be a number.")


@dataclass(frozen=True)
class PostOptions:
    """Options for posting a server count."""

    version: int = 1
    bot_token: str | None = None
    user_token: str | None = None
    count_or_shards: int | list[int] | None = None

    @classmethod
    def from_client(cls, options: ClientOptions):
        return cls(
            version=options.version,
            bot_token=options.effective_bot_token,
            user_token=options.user_token,
        )

    def merge(self, new):
        return merge_options(type(self), new, self)

    def check(self):
        _check_version(self)
        _check_optional_strings(self, "user_token")


def resolve_target(target, options, default):
    """Resolve the ``(id, overrides)`` pair of a call.

    The id slot may be omitted, in which case ``default`` is used, or may
    itself hold the overrides mapping.
    """
    overrides = normalize(options) if options is not None else {}
    if isinstance(target, Mapping):
        overrides = {**normalize(target), **overrides}
        target = default
    elif target is None:
        target = default
    return target, overrides


def resolve_post_target(target, count_or_shards, options, default):
    """Like :func:`resolve_target`, also accepting a count in the id slot."""
    shorthand = None
    if _is_int(target) or isinstance(target, (list, tuple)):
        shorthand, target = target, None

    target, overrides = resolve_target(target, options, default)
    if shorthand is not None:
        overrides["count_or_shards"] = shorthand
    if count_or_shards is not None:
        overrides["count_or_shards"] = count_or_shards
    return target, overrides


def resolve_count(value) -> dict:
    """Build the POST body for a server count or a list of shard counts."""
    if value is None:
        raise MissingValueError("count_or_shards must be defined.")
    if isinstance(value, (list, tuple)):
        _require(
            all(_is_int(count) for count in value),
            "count_or_shards must be a number or a list of numbers.",
        )
        return {"shards": list(value)}
    _require(_is_int(value), "count_or_shards must be a number or a list of numbers.")
    return {"server_count": value}
