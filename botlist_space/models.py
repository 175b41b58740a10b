"""Entities mapped from botlist.space API payloads.

Each entity is a read-only view over the payload it was built from. The
payload is deep-copied into ``raw`` so later changes to the caller's dict do
not leak into cached entities.
"""

import copy
from dataclasses import dataclass, field

SITE_URL = "https://botlist.space"
GITHUB_URL = "https://github.com"
GITLAB_URL = "https://gitlab.com"
DISCORD_INVITE_URL = "https://discord.gg"


def _mention(entity_id) -> str:
    return f"<@{entity_id}>"


def project(items, factory, *, normal=False, specified=None, stringify=False):
    """Project a list of raw sub-objects.

    ``normal`` returns the raw dicts, otherwise each item is wrapped with
    ``factory``. ``specified`` picks a single key/attribute from each item and
    ``stringify`` turns wrapped entities into their mention strings.
    """
    if stringify and specified:
        raise TypeError("specified cannot be combined with stringify.")
    if normal:
        return [item.get(specified) for item in items] if specified else list(items)

    entities = [factory(item) for item in items]
    if stringify:
        return [str(entity) for entity in entities]
    if specified:
        return [getattr(entity, specified) for entity in entities]
    return entities


@dataclass(frozen=True)
class Profile:
    """Profile fields shared by every kind of user."""

    id: str | None
    username: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    short_description: str | None = None
    github_username: str | None = None
    gitlab_username: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "Profile":
        links = payload.get("links") or {}
        return cls(
            id=payload.get("id"),
            username=payload.get("username"),
            discriminator=payload.get("discriminator"),
            avatar=payload.get("avatar"),
            short_description=payload.get("short_description"),
            github_username=links.get("github"),
            gitlab_username=links.get("gitlab"),
        )

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"

    @property
    def github_url(self) -> str | None:
        return f"{GITHUB_URL}/{self.github_username}" if self.github_username else None

    @property
    def gitlab_url(self) -> str | None:
        return f"{GITLAB_URL}/{self.gitlab_username}" if self.gitlab_username else None

    @property
    def url(self) -> str:
        """The user's page on botlist.space."""
        return f"{SITE_URL}/user/{self.id}"

    @property
    def mention(self) -> str:
        return _mention(self.id)


class _ProfileView:
    """Forwards attribute lookups to the embedded ``profile``."""

    def __getattr__(self, name):
        if name == "profile":
            raise AttributeError(name)
        return getattr(self.profile, name)

    def __str__(self):
        return self.profile.mention


@dataclass(frozen=True)
class PartialUser(_ProfileView):
    """A user as embedded in bot owners and upvotes."""

    profile: Profile
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "PartialUser":
        data = copy.deepcopy(payload)
        return cls(profile=Profile.from_payload(data), raw=data)


@dataclass(frozen=True)
class User(_ProfileView):
    """A user fetched from the users route."""

    profile: Profile
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "User":
        data = copy.deepcopy(payload)
        return cls(profile=Profile.from_payload(data), raw=data)

    def bots(self, *, normal=False, specified=None, stringify=False):
        """The bots this user owns.

        Example:
            user.bots(specified="username")  # ["Bot A", "Bot B"]
            user.bots(stringify=True)        # ["<@1>", "<@2>"]
        """
        return project(
            self.raw.get("bots") or [],
            Bot.from_payload,
            normal=normal,
            specified=specified,
            stringify=stringify,
        )


@dataclass(frozen=True)
class Bot:
    """A bot listed on botlist.space."""

    id: str | None
    username: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    prefix: str | None = None
    library: str | None = None
    short_description: str | None = None
    full_description: str | None = None
    server_count: int | None = None
    shards: list[int] | None = None
    invite: str | None = None
    website: str | None = None
    github: str | None = None
    support: str | None = None
    vanity: str | None = None
    timestamp: int | None = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "Bot":
        data = copy.deepcopy(payload)
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            discriminator=data.get("discriminator"),
            avatar=data.get("avatar"),
            prefix=data.get("prefix"),
            library=data.get("library"),
            short_description=data.get("short_description"),
            full_description=data.get("full_description"),
            server_count=data.get("server_count"),
            shards=data.get("shards"),
            invite=data.get("invite"),
            website=data.get("website"),
            github=data.get("github"),
            support=data.get("support"),
            vanity=data.get("vanity"),
            timestamp=data.get("timestamp"),
            raw=data,
        )

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"

    @property
    def url(self) -> str:
        return f"{SITE_URL}/bot/{self.id}"

    @property
    def invite_url(self) -> str | None:
        return self.invite or None

    @property
    def website_url(self) -> str | None:
        return self.website or None

    @property
    def github_url(self) -> str | None:
        if not self.github:
            return None
        if self.github.startswith(("http://", "https://")):
            return self.github
        return f"{GITHUB_URL}/{self.github}"

    @property
    def support_url(self) -> str | None:
        return f"{DISCORD_INVITE_URL}/{self.support}" if self.support else None

    @property
    def vanity_url(self) -> str | None:
        return f"{SITE_URL}/bot/{self.vanity}" if self.vanity else None

    @property
    def mention(self) -> str:
        return _mention(self.id)

    def owners(self, *, normal=False, specified=None, stringify=False):
        """The users that own this bot."""
        return project(
            self.raw.get("owners") or [],
            PartialUser.from_payload,
            normal=normal,
            specified=specified,
            stringify=stringify,
        )

    def __str__(self):
        return self.mention


@dataclass(frozen=True)
class Upvote:
    """A single upvote on a bot."""

    user: PartialUser
    timestamp: int | None = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "Upvote":
        data = copy.deepcopy(payload)
        return cls(
            user=PartialUser.from_payload(data.get("user") or {}),
            timestamp=data.get("timestamp"),
            raw=data,
        )

    @property
    def id(self) -> str | None:
        """The voter's ID."""
        return self.user.id


@dataclass(frozen=True)
class Stats:
    """Site-wide statistics."""

    bots: int | None = None
    users: int | None = None
    servers: int | None = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> "Stats":
        data = copy.deepcopy(payload)
        return cls(
            bots=data.get("bots"),
            users=data.get("users"),
            servers=data.get("servers"),
            raw=data,
        )
