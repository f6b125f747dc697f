from pytest_bdd import scenarios, given, then, parsers

from docker_actions.const import GITHUB_OUTPUT_ENV_VAR
from docker_actions.outputs import parse_outputs

scenarios(
    "cli/read_config.feature",
)


@given(parsers.parse('with the config path "{name}"'))
def config_path_argument(actions_command, tmp_path, name):
    actions_command.add_positional(str(tmp_path / name))


@given(parsers.parse('the GitHub output file already contains "{line}"'))
def existing_output(github_output, line):
    github_output.write_text(f"{line}\n")


@given("GITHUB_OUTPUT is not set")
def no_github_output(monkeypatch):
    monkeypatch.delenv(GITHUB_OUTPUT_ENV_VAR, raising=False)


@then("the step outputs are written in order:")
def check_step_output_order(github_output, datatable):
    assert list(parse_outputs(github_output.read_text()).keys()) == [row[0] for row in datatable]
