import pytest

from ciproject import BuildPipeline, ConfigBuilder, ExecutionMode, Step


@pytest.fixture
def build_pipeline() -> BuildPipeline:
    return BuildPipeline(
        id="Build",
        name="Build",
        templates=["T1", "T2", "T3"],
        steps=[
            Step(
                name="Build",
                id="RUNNER_2",
                type="ExecuteGradleTask",
                execution_mode=ExecutionMode.DEFAULT,
                params={"gradle_tasks": "%gradle_build_task%"},
            )
        ],
    )


@pytest.fixture
def pull_requests_pipeline() -> BuildPipeline:
    return BuildPipeline(
        id="PullRequests",
        name="Pull Requests",
        description="Builds pull requests for the project",
        templates=["T1", "T4", "T2"],
    )


@pytest.fixture
def gradleutils_builder(build_pipeline, pull_requests_pipeline) -> ConfigBuilder:
    builder = ConfigBuilder()
    builder.declare_parameter("git_main_branch", "main")
    builder.declare_parameter("github_repository_name", "GradleUtils")
    builder.add_build_pipeline(build_pipeline)
    builder.add_build_pipeline(pull_requests_pipeline)
    return builder
