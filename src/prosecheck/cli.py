"""Typer-based command line interface for the validation engine.

``blocks`` lists the blocks a document would be checked in.  ``replay`` feeds a
YAML action script through the reducer for a document and prints a JSON summary
of the resulting state, which makes the state machine easy to inspect without
an editor or a checking service.

Exit codes
----------
0 success
3 I/O error (missing document or script, filesystem issues)
4 configuration error
5 script error (malformed or unknown actions)
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .document.blocks import get_blocks_from_document, skip_node_types
from .io import load_script, parse_actions, read_document
from .report import block_to_dict, build_state_summary
from .session import ValidationSession
from .utils.errors import PositionOutOfBoundsError, ScriptError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="prosecheck",
    help="Inspect the prose validation engine. Use 'prosecheck replay' to run an action script.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load_config_or_exit(config_path: Path | None) -> ConfigModel:
    try:
        return load_config(config_path)
    except FileNotFoundError as exc:
        _safe_exit(3, str(exc))
    except (ValidationError, yaml.YAMLError, ValueError, OSError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])


@app.callback()
def main() -> None:
    """Entry point for the prosecheck command group."""
    pass


@app.command()
def blocks(
    doc_path: Path = typer.Argument(..., help="Plain-text document"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
) -> None:
    """Print the blocks of ``doc_path`` as JSON."""

    cfg = _load_config_or_exit(config_path)
    try:
        root = read_document(doc_path)
    except (OSError, UnicodeDecodeError) as exc:
        _safe_exit(3, str(exc))
    found = get_blocks_from_document(root, skip=skip_node_types(*cfg.skip_node_types))
    typer.echo(json.dumps([block_to_dict(b) for b in found], indent=2))


@app.command()
def replay(  # noqa: PLR0913
    doc_path: Path = typer.Option(..., "--doc", help="Plain-text document"),  # noqa: B008
    script_path: Path = typer.Option(  # noqa: B008
        ..., "--script", help="YAML file with an 'actions' list"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    debug: bool | None = typer.Option(  # noqa: B008
        None, "--debug/--no-debug", help="Override debug decorations"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Log every action to stderr"
    ),
) -> None:
    """Replay the actions of ``script_path`` against ``doc_path``."""

    cfg = _load_config_or_exit(config_path)
    if debug is not None:
        cfg = cfg.model_copy(update={"debug": debug})
    configure_logging("DEBUG" if verbose else cfg.logging.level)

    try:
        root = read_document(doc_path)
        entries = load_script(script_path)
    except ScriptError as exc:
        _safe_exit(5, str(exc))
    except (OSError, UnicodeDecodeError) as exc:
        _safe_exit(3, str(exc))

    session = ValidationSession(root, cfg)
    try:
        script_actions = parse_actions(entries, session.state.config)
    except ScriptError as exc:
        _safe_exit(5, str(exc))

    for action in script_actions:
        if verbose:
            typer.echo(f"Dispatching {type(action).__name__}", err=True)
        session.dispatch(action)

    try:
        summary = build_state_summary(session.state, session.doc)
    except PositionOutOfBoundsError as exc:
        _safe_exit(5, str(exc))
    typer.echo(json.dumps(summary, indent=2))
