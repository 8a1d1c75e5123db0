"""Read git remotes of a local checkout."""

import subprocess
from pathlib import Path


def first_remote_url(repo_dir: Path) -> str:
    """
    Get the URL of the first remote of a local git checkout.

    Args:
        repo_dir: Directory inside the checkout

    Returns:
        Remote URL

    Raises:
        ValueError: If the directory is not a git checkout or has no remotes
    """
    try:
        remotes = subprocess.run(
            ["git", "remote"],
            cwd=repo_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ValueError(f"Unable to run git in {repo_dir}: {e}") from e

    if remotes.returncode != 0:
        raise ValueError(f"Not a git repository: {repo_dir}")

    names = remotes.stdout.split()
    if not names:
        raise ValueError(f"No git remotes configured in {repo_dir}")

    url = subprocess.run(
        ["git", "remote", "get-url", names[0]],
        cwd=repo_dir,
        capture_output=True,
        text=True,
        check=False,
    )
    if url.returncode != 0 or not url.stdout.strip():
        raise ValueError(f"Unable to read URL of remote '{names[0]}' in {repo_dir}")

    return url.stdout.strip()
