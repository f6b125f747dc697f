from pathlib import Path

import pytest
from pytest_bdd import given, when, then, parsers

from docker_actions.outputs import parse_outputs
from test.cli.actions_command import ActionsCommand
from test.helpers import FakeManifestPublisher


@pytest.fixture
def actions_command():
    return ActionsCommand()


# Construct the docker-actions command and all arguments
@given("I call docker-actions")
def bare_command(actions_command):
    actions_command.reset()


@given(parsers.parse('I call docker-actions "{command}"'))
def sub_command(actions_command, command):
    actions_command.reset()
    actions_command.set_subcommand(command)


@given("a GitHub output file", target_fixture="github_output")
def github_output(output_file) -> Path:
    return output_file


@given("a fake Docker registry", target_fixture="registry")
def fake_registry(mocker) -> FakeManifestPublisher:
    registry = FakeManifestPublisher()
    mocker.patch("docker_actions.cli.manifest.DockerManifestPublisher", return_value=registry)
    mocker.patch("docker_actions.cli.build.DockerManifestPublisher", return_value=registry)
    return registry


@given("a Docker config file:", target_fixture="config_path")
def docker_config_file(write_config, docstring) -> Path:
    return write_config(docstring)


@given(parsers.parse("a Docker config file containing '{content}'"), target_fixture="config_path")
def docker_config_file_inline(write_config, content) -> Path:
    return write_config(content)


@given("a Docker config file that is not valid UTF-8", target_fixture="config_path")
def docker_config_file_invalid_utf8(tmp_path) -> Path:
    path = tmp_path / "docker-config.json"
    path.write_bytes(b'{"imageName": "my\xffimage"}')
    return path


@given("with the config file as the argument")
def config_file_argument(actions_command, config_path):
    actions_command.add_positional(str(config_path))


@given("with the arguments:")
def add_args_table(actions_command, datatable):
    for row in datatable:
        actions_command.add_args(row)


# Run the command
@when("I execute the command", target_fixture="command_logs")
def run(actions_command, caplog):
    actions_command.run()
    return caplog


# Check the results of the command
@then("The command succeeds")
def check_success(actions_command):
    assert actions_command.result.exit_code == 0, actions_command.result.output


@then(parsers.parse("The command exits with code {exit_code:d}"))
def check_exit_code(actions_command, exit_code: int):
    assert actions_command.result.exit_code == exit_code


@then("The command fails")
def check_failure(actions_command):
    assert actions_command.result.exit_code != 0


@then("usage is shown")
def check_usage(actions_command):
    assert "Usage:" in actions_command.result.output


@then("help is shown")
def check_help(actions_command):
    assert "Usage:" in actions_command.result.output
    assert "Options" in actions_command.result.output


@then("the output includes:")
def check_output(actions_command, datatable):
    for row in datatable:
        assert row[0] in actions_command.result.output


@then("the output does not include:")
def check_output_excludes(actions_command, datatable):
    for row in datatable:
        assert row[0] not in actions_command.result.output


@then("the log includes:")
def check_log(caplog, datatable):
    for row in datatable:
        assert row[0] in caplog.text


@then("the log does not include:")
def check_log_excludes(caplog, datatable):
    for row in datatable:
        assert row[0] not in caplog.text


@then("the step outputs are:")
def check_step_outputs(github_output, datatable):
    assert parse_outputs(github_output.read_text()) == {row[0]: row[1] for row in datatable}


@then(parsers.parse('the step output "{key}" is:'))
def check_step_output(github_output, key, docstring):
    assert parse_outputs(github_output.read_text())[key] == docstring


@then("no step outputs are written")
def check_no_step_outputs(github_output):
    assert github_output.read_text() == ""
