"""Client for the subreddit wiki endpoints of the Reddit API."""

__version__ = "0.1.0"

__all__ = ["client", "things", "wiki"]