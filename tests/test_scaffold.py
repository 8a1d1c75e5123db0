import asyncio

import httpx

from ciproject import ExecutionMode, IssueTrackerIntegration
from ciproject.github.client import GitHubClient
from ciproject.models import RepositoryInfo
from ciproject.scaffold import ProjectScaffolder, template_prefix_for

REPO = RepositoryInfo(
    owner="MinecraftForge",
    name="GradleUtils",
    default_branch="main",
    html_url="https://github.com/MinecraftForge/GradleUtils",
)


def test_default_project_matches_gradle_layout():
    project = ProjectScaffolder().default_builder(REPO).build()

    assert project.params == {
        "git_main_branch": "main",
        "github_repository_name": "GradleUtils",
    }

    build, pull_requests = project.build_types
    assert build.templates == (
        "MinecraftForge_BuildWithDiscordNotifications",
        "MinecraftForge_GradleBuild",
        "MinecraftForge_BuildMainBranches",
    )
    (step,) = build.steps
    assert step.id == "RUNNER_2"
    assert step.type == "MinecraftForge_ExecuteGradleTask"
    assert step.execution_mode is ExecutionMode.DEFAULT
    assert step.params["additional_gradle_parameters"] == (
        "--refresh-dependencies --continue -x %gradle_test_task%"
    )

    assert pull_requests.id == "PullRequests"
    assert pull_requests.name == "Pull Requests"
    assert pull_requests.templates[1] == "MinecraftForge_BuildPullRequests"

    (feature,) = project.features
    assert isinstance(feature, IssueTrackerIntegration)
    assert feature.id == "PROJECT_EXT_4"
    assert feature.display_name == "MinecraftForge/GradleUtils"


def test_template_prefix_override():
    project = ProjectScaffolder(template_prefix="Shared").default_builder(REPO).build()

    assert all(t.startswith("Shared_") for p in project.build_types for t in p.templates)


def test_template_prefix_is_sanitized():
    assert template_prefix_for("my-org.io") == "my_org_io"


def test_scaffold_from_url_queries_github():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "name": "GradleUtils",
                "owner": {"login": "neoforged"},
                "default_branch": "develop",
                "html_url": "https://github.com/neoforged/GradleUtils",
            },
        )

    scaffolder = ProjectScaffolder(
        github_client=GitHubClient(token="secret", transport=httpx.MockTransport(handler))
    )
    project = asyncio.run(
        scaffolder.scaffold_from_url("https://github.com/neoforged/GradleUtils")
    )

    assert project.params["git_main_branch"] == "develop"
    assert project.build_types[0].templates[0] == "neoforged_BuildWithDiscordNotifications"


def test_scaffold_offline():
    scaffolder = ProjectScaffolder(github_client=GitHubClient(token="secret"))
    project = asyncio.run(
        scaffolder.scaffold_from_url("git@github.com:neoforged/GradleUtils.git", offline=True)
    )

    assert project.params["git_main_branch"] == "main"


def test_write_replaces_existing_directory(tmp_path):
    stale = tmp_path / ".teamcity" / "stale.kts"
    stale.parent.mkdir()
    stale.write_text("old", encoding="utf-8")

    scaffolder = ProjectScaffolder(github_client=GitHubClient(token="secret"))
    project = scaffolder.default_builder(REPO).build()
    settings = scaffolder.write(project, tmp_path)

    assert settings == tmp_path / ".teamcity" / "settings.kts"
    assert "object Build : BuildType({" in settings.read_text(encoding="utf-8")
    assert not stale.exists()


def test_write_keeps_existing_files_when_deletion_disabled(tmp_path):
    kept = tmp_path / ".teamcity" / "pom.xml"
    kept.parent.mkdir()
    kept.write_text("<project/>", encoding="utf-8")

    scaffolder = ProjectScaffolder(github_client=GitHubClient(token="secret"))
    scaffolder.write(scaffolder.default_builder(REPO).build(), tmp_path, disable_deletion=True)

    assert kept.exists()
    assert (tmp_path / ".teamcity" / "settings.kts").exists()
