"""GitHub integration."""

from ciproject.github.client import GitHubClient, parse_repository_url
from ciproject.github.remote import first_remote_url

__all__ = ["GitHubClient", "first_remote_url", "parse_repository_url"]
