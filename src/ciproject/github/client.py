"""GitHub API client for fetching repository information."""

import os
import re
from typing import Any

import httpx

from ciproject.models.repository import RepositoryInfo

# https://github.com/o/r(.git), git@github.com:o/r.git, ssh://git@github.com/o/r.git
REPOSITORY_URL_PATTERN = re.compile(
    r"(?:^|[/@])github\.com[:/]([^/\s]+)/([^/\s]+?)(?:\.git)?/?$"
)


def parse_repository_url(url: str) -> tuple[str, str]:
    """
    Parse a GitHub repository or git remote URL.

    Args:
        url: Repository URL (HTTPS, SSH or scp-style remote)

    Returns:
        Tuple of (owner, repo)

    Raises:
        ValueError: If URL format is invalid
    """
    match = REPOSITORY_URL_PATTERN.search(url.strip())
    if not match:
        raise ValueError(f"Invalid GitHub repository URL: {url}")

    owner, repo = match.groups()
    return owner, repo


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub API token. If None, reads from GITHUB_TOKEN env var.
            transport: Optional httpx transport (used by tests)
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = "https://api.github.com"
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """
        Fetch repository information from GitHub API.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            RepositoryInfo object with repository details

        Raises:
            httpx.HTTPError: If API request fails
        """
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/repos/{owner}/{repo}",
                headers=self.headers,
                timeout=30.0,
            )
            response.raise_for_status()
            repo_data: dict[str, Any] = response.json()

            return RepositoryInfo(
                owner=repo_data["owner"]["login"],
                name=repo_data["name"],
                default_branch=repo_data.get("default_branch") or "main",
                html_url=repo_data["html_url"],
            )

    async def get_repository_from_url(self, url: str) -> RepositoryInfo:
        """Fetch repository information for a repository or remote URL."""
        owner, repo = parse_repository_url(url)
        return await self.get_repository(owner, repo)

    def get_repository_info_offline(
        self, url: str, default_branch: str = "main"
    ) -> RepositoryInfo:
        """
        Build repository information from the URL alone, without an API call.

        Args:
            url: Repository URL
            default_branch: Branch assumed to be the main branch

        Returns:
            RepositoryInfo object
        """
        owner, repo = parse_repository_url(url)
        return RepositoryInfo(
            owner=owner,
            name=repo,
            default_branch=default_branch,
            html_url=f"https://github.com/{owner}/{repo}",
        )
