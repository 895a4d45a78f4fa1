"""The wiki section of the Reddit API."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Mapping

from redditwiki.client import Client, ListOptions
from redditwiki.things import Post, User, parse_timestamp, posts_from_listing, user_from_thing

REVISION_ID_PREFIX = "WikiRevision_"


class PermissionLevel(IntEnum):
    """Who may edit a wiki page."""

    SUBREDDIT_WIKI_PERMISSIONS = 0
    APPROVED_CONTRIBUTORS_ONLY = 1
    MODERATORS_ONLY = 2


@dataclass
class WikiPage:
    """A wiki page in a subreddit."""

    content: str = ""
    reason: str = ""
    may_revise: bool = False
    revision_id: str = ""
    revision_date: datetime | None = None
    revision_by: User | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WikiPage":
        return cls(
            content=data.get("content_md") or "",
            reason=data.get("reason") or "",
            may_revise=bool(data.get("may_revise")),
            revision_id=data.get("revision_id") or "",
            revision_date=parse_timestamp(data.get("revision_date")),
            revision_by=user_from_thing(data.get("revision_by")),
        )


@dataclass
class WikiPageSettings:
    """The settings of a wiki page."""

    permission_level: PermissionLevel = PermissionLevel.SUBREDDIT_WIKI_PERMISSIONS
    listed: bool = False
    editors: list[User] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WikiPageSettings":
        editors = [user for thing in data.get("editors") or [] if (user := user_from_thing(thing))]
        return cls(
            permission_level=PermissionLevel(data.get("permlevel") or 0),
            listed=bool(data.get("listed")),
            editors=editors,
        )


@dataclass
class WikiPageRevision:
    """A revision of a wiki page."""

    id: str = ""
    page: str = ""
    created: datetime | None = None
    reason: str = ""
    hidden: bool = False
    author: User | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WikiPageRevision":
        return cls(
            id=data.get("id") or "",
            page=data.get("page") or "",
            created=parse_timestamp(data.get("timestamp")),
            reason=data.get("reason") or "",
            hidden=bool(data.get("revision_hidden")),
            author=user_from_thing(data.get("author")),
        )


@dataclass
class WikiPageEditRequest:
    """A request to edit a wiki page; the reason is optional, up to 256 characters."""

    subreddit: str
    page: str
    content: str
    reason: str = ""

    def to_form(self) -> dict[str, str]:
        form = {"page": self.page, "content": self.content}
        if self.reason:
            form["reason"] = self.reason
        return form


@dataclass
class WikiPageSettingsUpdateRequest:
    """A request to change a wiki page's permissions and visibility."""

    permission_level: PermissionLevel
    listed: bool | None = None

    def to_form(self) -> dict[str, str]:
        # The permission level must always be sent, or the server answers 500.
        form = {"permlevel": str(int(self.permission_level))}
        if self.listed is not None:
            form["listed"] = "true" if self.listed else "false"
        return form


def _thing_data(thing: Any, kind: str) -> Any:
    if isinstance(thing, Mapping) and thing.get("kind") == kind:
        return thing.get("data")
    return None


def _with_revision_prefix(value: str) -> str:
    if value and not value.startswith(REVISION_ID_PREFIX):
        return REVISION_ID_PREFIX + value
    return value


class WikiService:
    """Wiki operations of a subreddit."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def page(self, subreddit: str, page: str) -> WikiPage | None:
        """Get the current version of a wiki page."""
        return self.page_revision(subreddit, page, "")

    def page_revision(self, subreddit: str, page: str, revision_id: str) -> WikiPage | None:
        """Get a wiki page as of a revision; an empty revision id gives the latest."""
        params = {"v": revision_id} if revision_id else {}
        thing = self.client.get_json(f"r/{subreddit}/wiki/{page}", params)
        data = _thing_data(thing, "wikipage")
        return WikiPage.from_json(data) if isinstance(data, Mapping) else None

    def pages(self, subreddit: str) -> list[str] | None:
        """List the wiki pages of a subreddit."""
        thing = self.client.get_json(f"r/{subreddit}/wiki/pages")
        data = _thing_data(thing, "wikipagelisting")
        return list(data) if isinstance(data, list) else None

    def edit(self, request: WikiPageEditRequest | None) -> None:
        """Edit a wiki page."""
        if request is None:
            raise ValueError("wiki page edit request cannot be None")
        self.client.post_form(f"r/{request.subreddit}/api/wiki/edit", request.to_form())

    def revert(self, subreddit: str, page: str, revision_id: str) -> None:
        """Revert a wiki page to a revision."""
        self.client.post_form(
            f"r/{subreddit}/api/wiki/revert", {"page": page, "revision": revision_id}
        )

    def settings(self, subreddit: str, page: str) -> WikiPageSettings | None:
        """Get the settings of a wiki page."""
        thing = self.client.get_json(f"r/{subreddit}/wiki/settings/{page}")
        data = _thing_data(thing, "wikipagesettings")
        return WikiPageSettings.from_json(data) if isinstance(data, Mapping) else None

    def update_settings(
        self, subreddit: str, page: str, request: WikiPageSettingsUpdateRequest | None
    ) -> WikiPageSettings | None:
        """Update the settings of a wiki page and return the new settings."""
        if request is None:
            raise ValueError("wiki page settings update request cannot be None")
        thing = self.client.post_form(f"r/{subreddit}/wiki/settings/{page}", request.to_form())
        data = _thing_data(thing, "wikipagesettings")
        return WikiPageSettings.from_json(data) if isinstance(data, Mapping) else None

    def discussions(
        self, subreddit: str, page: str, options: ListOptions | None = None
    ) -> list[Post]:
        """List the posts that discuss a wiki page."""
        params = options.to_params() if options else None
        listing = self.client.get_json(f"r/{subreddit}/wiki/discussions/{page}", params)
        return posts_from_listing(listing)

    def toggle_visibility(self, subreddit: str, page: str, revision_id: str) -> bool:
        """Toggle whether a revision is public; returns True if it is now hidden."""
        root = self.client.post_form(
            f"r/{subreddit}/api/wiki/hide", {"page": page, "revision": revision_id}
        )
        return bool(root.get("status")) if isinstance(root, Mapping) else False

    def _revisions(
        self, subreddit: str, page: str, options: ListOptions | None
    ) -> list[WikiPageRevision]:
        path = f"r/{subreddit}/wiki/revisions"
        if page:
            path += f"/{page}"
        params = None
        if options is not None:
            options = dataclasses.replace(
                options,
                after=_with_revision_prefix(options.after),
                before=_with_revision_prefix(options.before),
            )
            params = options.to_params()
        root = self.client.get_json(path, params)
        data = root.get("data") if isinstance(root, Mapping) else None
        children = data.get("children") if isinstance(data, Mapping) else None
        return [WikiPageRevision.from_json(child) for child in children or []]

    def revisions(
        self, subreddit: str, options: ListOptions | None = None
    ) -> list[WikiPageRevision]:
        """List revisions of every page in the wiki."""
        return self._revisions(subreddit, "", options)

    def revisions_page(
        self, subreddit: str, page: str, options: ListOptions | None = None
    ) -> list[WikiPageRevision]:
        """List revisions of one page; an empty page lists all pages' revisions."""
        return self._revisions(subreddit, page, options)

    def allow(self, subreddit: str, page: str, username: str) -> None:
        """Let a user edit a wiki page."""
        self.client.post_form(
            f"r/{subreddit}/api/wiki/alloweditor/add", {"page": page, "username": username}
        )

    def deny(self, subreddit: str, page: str, username: str) -> None:
        """Stop a user from editing a wiki page."""
        self.client.post_form(
            f"r/{subreddit}/api/wiki/alloweditor/del", {"page": page, "username": username}
        )