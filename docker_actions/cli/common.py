import functools
import inspect
import logging
from typing import Annotated, NoReturn, Optional

import typer

from docker_actions.error import ActionsUsageError
from docker_actions.log import annotate_error, init_logging

log = logging.getLogger(__name__)


def with_verbosity_flags(fn):
    @functools.wraps(fn)
    def wrapper(
        *args,
        verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
        quiet: Annotated[
            Optional[bool], typer.Option("--quiet", "-q", help="Supress all output except errors")
        ] = False,
        **kwargs,
    ):
        if verbose and quiet:
            raise typer.BadParameter("Cannot set both --verbose and --quiet flags.")

        log_level: str | int = logging.INFO
        if verbose:
            log_level = logging.DEBUG
        elif quiet:
            log_level = logging.ERROR

        init_logging(log_level)
        logging.getLogger().setLevel(log_level)
        return fn(*args, **kwargs)

    # Update signature with verbosity flags
    sig = inspect.signature(wrapper)
    params = list(sig.parameters.values())
    params.extend(
        [
            inspect.Parameter(
                "verbose",
                inspect.Parameter.KEYWORD_ONLY,
                default=False,
                annotation=Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable debug logging")],
            ),
            inspect.Parameter(
                "quiet",
                inspect.Parameter.KEYWORD_ONLY,
                default=False,
                annotation=Annotated[
                    Optional[bool], typer.Option("--quiet", "-q", help="Supress all output except errors")
                ],
            ),
        ]
    )
    sig = sig.replace(parameters=params)
    wrapper.__signature__ = sig

    return wrapper


def require_arguments(ctx: typer.Context, **arguments: str | None) -> None:
    """Fail with the command usage when a positional argument was not supplied.

    An empty string counts as supplied; workflows routinely pass empty step outputs.

    :param ctx: The typer context of the running command.
    :param arguments: Argument names mapped to their values, None when missing.

    :raises ActionsUsageError: If any argument is None.
    """
    missing = [name.upper() for name, value in arguments.items() if value is None]
    if missing:
        raise ActionsUsageError(f"Missing argument(s): {', '.join(missing)}", usage=ctx.get_usage())


def exit_with_error(error: Exception) -> NoReturn:
    """Report an error as a GitHub Actions annotation and exit with code 1."""
    log.debug("Command failed", exc_info=error)
    annotate_error(str(error).rstrip())
    raise typer.Exit(code=1)


def parse_key_value_pairs(value: list[str] | None) -> dict[str, str]:
    """Parses key=value option pairs into a dictionary"""
    value_map = dict()
    if value is not None:
        for v in value:
            sp = v.split("=", 1)
            if len(sp) != 2:
                raise ActionsUsageError(f"Expected key=value pair, got '{v}'")
            value_map[sp[0]] = sp[1]
    return value_map
