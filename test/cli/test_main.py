from pytest_bdd import scenarios, then

from docker_actions import __version__

scenarios(
    "cli/main.feature",
)


@then("the version is shown")
def check_version(actions_command):
    assert f"docker-actions v{__version__}" in actions_command.result.output
