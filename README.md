# redditwiki

A small client for the wiki endpoints of the Reddit API. It can read, edit and
revert subreddit wiki pages, manage page settings and editors, and browse
revision history and the posts that discuss a page.

## Installation

```
pip install redditwiki
```

The only runtime dependency is `requests`.

## Modules

- `redditwiki.client`: `Client`, `ListOptions` and `RedditAPIError`.
- `redditwiki.things`: the `User` and `Post` dataclasses, plus helpers that read
  them from Reddit "things" (`user_from_thing`, `post_from_thing`,
  `posts_from_listing`, `parse_timestamp`).
- `redditwiki.wiki`: `WikiService` and the wiki data types `WikiPage`,
  `WikiPageSettings`, `WikiPageRevision`, `WikiPageEditRequest`,
  `WikiPageSettingsUpdateRequest` and `PermissionLevel`.

## Usage

Create a `Client` with the API base URL. You can also pass a
`requests.Session`; without one, the client makes its own. For authenticated
endpoints, give it a session that already sends your OAuth token. Then pass the
client to `WikiService`. `Client` is a context manager, and leaving the block
closes its session.

```python
import requests

from redditwiki.client import Client, ListOptions
from redditwiki.wiki import (
    PermissionLevel,
    WikiPageEditRequest,
    WikiPageSettingsUpdateRequest,
    WikiService,
)

session = requests.Session()
session.headers["Authorization"] = "Bearer token"

with Client("https://oauth.reddit.com/", session) as client:
    wiki = WikiService(client)

    page = wiki.page("mysubreddit", "index")
    if page is not None:
        print(page.content, page.revision_by.name if page.revision_by else None)

    print(wiki.pages("mysubreddit"))

    wiki.edit(
        WikiPageEditRequest(
            subreddit="mysubreddit",
            page="index",
            content="# Welcome",
            reason="initial version",
        )
    )

    settings = wiki.update_settings(
        "mysubreddit",
        "index",
        WikiPageSettingsUpdateRequest(
            permission_level=PermissionLevel.MODERATORS_ONLY,
            listed=True,
        ),
    )

    for revision in wiki.revisions_page("mysubreddit", "index", ListOptions(limit=10)):
        print(revision.id, revision.created, revision.reason)
```

The other `WikiService` methods are `page_revision`, `revert`, `settings`,
`discussions`, `toggle_visibility`, `revisions`, `allow` and `deny`.

`page`, `page_revision`, `settings` and `update_settings` return `None` when the
reply is not of the expected kind, and `pages` does the same. Timestamps are
returned as timezone-aware UTC `datetime` objects.

In `ListOptions`, `limit`, `after` and `before` are left out of the query when
they are not set. For the revision listings, `after` and `before` get the
`WikiRevision_` prefix added if they do not already have it.

## Errors

`Client` raises `RedditAPIError` when the API answers with an error status or
sends a body that is not valid JSON. The exception carries `message`,
`status_code` and `url`. `edit` and `update_settings` raise `ValueError` if
the request they are given is `None`.

## What it does not do

The package covers only the wiki endpoints. It does not obtain or refresh
OAuth tokens, so you have to supply an authenticated session yourself. It does
not follow listing pages automatically, and it has no command-line interface.

## Development

```
pip install -e ".[test]"
pytest
```