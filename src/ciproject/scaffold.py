"""Default TeamCity project scaffolding for a GitHub repository."""

import re
import shutil
from pathlib import Path

from ciproject.builder import ConfigBuilder
from ciproject.github.client import GitHubClient
from ciproject.models import (
    BuildPipeline,
    ExecutionMode,
    IssueTrackerIntegration,
    Project,
    RepositoryInfo,
    Step,
)
from ciproject.serializers import to_kotlin_dsl

SETTINGS_DIR = ".teamcity"
SETTINGS_FILE = "settings.kts"
ISSUE_TRACKER_FEATURE_ID = "PROJECT_EXT_4"


def template_prefix_for(owner: str) -> str:
    """Turn an organization name into a template id prefix."""
    return re.sub(r"[^A-Za-z0-9_]", "_", owner)


class ProjectScaffolder:
    """Generate the default build configuration for a Gradle repository."""

    # Build type layouts: template suffixes in application order
    PIPELINE_TEMPLATES: dict[str, list[str]] = {
        "Build": ["BuildWithDiscordNotifications", "GradleBuild", "BuildMainBranches"],
        "PullRequests": [
            "BuildWithDiscordNotifications",
            "BuildPullRequests",
            "GradleBuild",
        ],
    }

    def __init__(
        self,
        template_prefix: str | None = None,
        github_client: GitHubClient | None = None,
    ):
        """
        Initialize project scaffolder.

        Args:
            template_prefix: Prefix of the shared template ids
                (defaults to the repository organization)
            github_client: Client used to look up repositories
        """
        self.template_prefix = template_prefix
        self.github_client = github_client or GitHubClient()

    def _templates(self, pipeline_id: str, prefix: str) -> list[str]:
        return [f"{prefix}_{suffix}" for suffix in self.PIPELINE_TEMPLATES[pipeline_id]]

    def default_builder(self, repo: RepositoryInfo) -> ConfigBuilder:
        """
        Build the default project for a repository.

        Args:
            repo: Repository information

        Returns:
            Open ConfigBuilder, ready for further declarations
        """
        prefix = self.template_prefix or template_prefix_for(repo.owner)
        builder = ConfigBuilder()

        builder.declare_parameter("git_main_branch", repo.default_branch)
        builder.declare_parameter("github_repository_name", repo.name)

        builder.add_build_pipeline(
            BuildPipeline(
                id="Build",
                name="Build",
                templates=self._templates("Build", prefix),
                steps=[
                    Step(
                        name="Build",
                        id="RUNNER_2",
                        type=f"{prefix}_ExecuteGradleTask",
                        execution_mode=ExecutionMode.DEFAULT,
                        params={
                            "gradle_tasks": "%gradle_build_task%",
                            "additional_gradle_parameters": (
                                "--refresh-dependencies --continue -x %gradle_test_task%"
                            ),
                        },
                    )
                ],
            )
        )
        builder.add_build_pipeline(
            BuildPipeline(
                id="PullRequests",
                name="Pull Requests",
                description="Builds pull requests for the project",
                templates=self._templates("PullRequests", prefix),
            )
        )

        builder.add_feature(
            IssueTrackerIntegration(
                id=ISSUE_TRACKER_FEATURE_ID,
                display_name=repo.full_name,
                repository_url=repo.html_url,
            )
        )
        return builder

    async def scaffold_from_url(self, url: str, offline: bool = False) -> Project:
        """
        Build the default project for a repository URL.

        Args:
            url: GitHub repository or git remote URL
            offline: Skip the GitHub API and assume the main branch is ``main``

        Returns:
            Validated project
        """
        if offline:
            repo = self.github_client.get_repository_info_offline(url)
        else:
            repo = await self.github_client.get_repository_from_url(url)
        return self.default_builder(repo).build()

    def write(
        self, project: Project, destination: Path, disable_deletion: bool = False
    ) -> Path:
        """
        Write ``.teamcity/settings.kts`` into the destination directory.

        An existing ``.teamcity`` directory is removed first unless
        ``disable_deletion`` is set.

        Args:
            project: Project to render
            destination: Project root directory
            disable_deletion: Keep existing files in ``.teamcity``

        Returns:
            Path to the written settings file
        """
        settings_dir = destination / SETTINGS_DIR
        if settings_dir.exists() and not disable_deletion:
            shutil.rmtree(settings_dir)
        settings_dir.mkdir(parents=True, exist_ok=True)

        settings_path = settings_dir / SETTINGS_FILE
        settings_path.write_text(to_kotlin_dsl(project), encoding="utf-8")
        return settings_path
