from docker_actions.cli.main import app

app()
