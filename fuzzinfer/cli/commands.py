"""
CLI commands for fuzzinfer.

- evaluate: Process an engine description for a set of input values
- check: Report whether an engine is ready and which type it is
- membership: Evaluate a single term over a set of values
- terms: List the registered component names
"""

import json
import sys
from typing import NoReturn, Optional

import numpy as np
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fuzzinfer import get_logger, operation as op, set_debug_mode
from fuzzinfer.config.loader import EngineConfigLoader
from fuzzinfer.engine import Engine
from fuzzinfer.errors import FuzzyError
from fuzzinfer.factory import FactoryManager

# Create a Typer application with help text
cli_app = typer.Typer(
    name="fuzzinfer",
    help="fuzzinfer - Fuzzy inference engine",
    add_completion=False,
    no_args_is_help=True,
)

logger = get_logger(__name__)

console = Console()
error_console = Console(stderr=True)

REGISTRY_KINDS = ("term", "tnorm", "snorm", "hedge", "defuzzifier", "activation", "function")


def parse_input_values(pairs: list[str]) -> dict[str, float]:
    """
    Parse ``name=value`` pairs given on the command line.

    Raises:
        ValueError: If a pair has no ``=`` or its value is not a number
    """
    values = {}
    for pair in pairs:
        name, separator, text = pair.partition("=")
        name = name.strip()
        if not separator or not name:
            raise ValueError(f"Expected name=value, got '{pair}'")
        try:
            values[name] = float(text)
        except ValueError:
            raise ValueError(f"Value of '{name}' is not a number: '{text}'") from None
    return values


def _load_engine(config_file: str) -> Engine:
    return EngineConfigLoader().load_engine(config_file)


def _describe(error: FuzzyError) -> str:
    if error.suggestion:
        return f"{error}\nSuggestion: {error.suggestion}"
    return str(error)


def _fail(message: str, verbose: bool = False) -> NoReturn:
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    if verbose:
        logger.error(message, exc_info=True)
    sys.exit(1)


@cli_app.command("evaluate")
def evaluate_engine(
    config_file: str = typer.Argument(..., help="Path to the engine description (YAML)"),
    inputs: Optional[list[str]] = typer.Option(
        None, "--input", "-i", help="Input value as name=value; repeat for each input"
    ),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format (table, json)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
):
    """
    Process an engine for the given input values.

    Inputs that are not given keep the value NaN.

    Examples:
        fuzzinfer evaluate tipper.yaml --input service=7.5 --input food=3
        fuzzinfer evaluate tipper.yaml -i service=2 --format json
    """
    if verbose:
        set_debug_mode(True)
    try:
        values = parse_input_values(inputs or [])
        engine = _load_engine(config_file)

        ready, problems = engine.is_ready()
        if not ready:
            error_console.print("[bold red]Error:[/bold red] Engine is not ready")
            for problem in problems:
                error_console.print(f"  - {escape(problem)}")
            sys.exit(1)

        for name, value in values.items():
            engine.set_input_value(name, value)
        engine.process()
    except ValueError as e:
        _fail(str(e))
    except FuzzyError as e:
        _fail(_describe(e), verbose)

    if output_format == "json":
        result = {
            "inputs": {v.name: v.value for v in engine.input_variables},
            "outputs": {v.name: v.value for v in engine.output_variables},
        }
        print(json.dumps(result, indent=2))
        return

    table = Table(title=f"Engine: {engine.name or config_file}")
    table.add_column("Variable", style="cyan")
    table.add_column("Kind", style="blue")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Fuzzy value", style="magenta")
    for variable in engine.input_variables:
        table.add_row(
            variable.name,
            "input",
            op.str_value(variable.value),
            variable.fuzzy_input_value(),
        )
    for variable in engine.output_variables:
        table.add_row(
            variable.name,
            "output",
            op.str_value(variable.value),
            variable.fuzzy_output_value(),
        )
    console.print(table)


@cli_app.command("check")
def check_engine(
    config_file: str = typer.Argument(..., help="Path to the engine description (YAML)"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
):
    """
    Check that an engine is ready to process and report its type.

    Exits with status 1 when the engine is not ready.
    """
    if verbose:
        set_debug_mode(True)
    try:
        engine = _load_engine(config_file)
    except FuzzyError as e:
        _fail(_describe(e), verbose)

    ready, problems = engine.is_ready()
    engine_type, reason = engine.type()

    console.print(f"[bold]Engine:[/bold] {engine.name or config_file}")
    console.print(
        f"Inputs: {len(engine.input_variables)} | "
        f"Outputs: {len(engine.output_variables)} | "
        f"Rule blocks: {len(engine.rule_blocks)}"
    )
    console.print(f"[bold]Type:[/bold] {engine_type.value}")
    console.print(f"  {reason}")

    if ready:
        console.print("[green]✓ Engine is ready[/green]")
        return

    console.print("[yellow]Engine is not ready:[/yellow]")
    for problem in problems:
        console.print(f"  - {escape(problem)}")
    sys.exit(1)


@cli_app.command("membership")
def compute_membership(
    term_type: str = typer.Argument(..., help="Term type, e.g. Triangle"),
    parameters: str = typer.Argument(..., help="Term parameters, e.g. '0 5 10'"),
    x_values: Optional[list[float]] = typer.Option(
        None, "--x", "-x", help="Value to evaluate; repeat for each value"
    ),
    start: Optional[float] = typer.Option(None, "--start", help="First sampled value"),
    end: Optional[float] = typer.Option(None, "--end", help="Last sampled value"),
    resolution: int = typer.Option(
        10, "--resolution", "-r", help="Number of intervals between start and end"
    ),
):
    """
    Evaluate the membership of values in a term.

    Values are given with --x, or sampled evenly with --start and --end.

    Examples:
        fuzzinfer membership Triangle "0 5 10" --x 2.5 --x 5
        fuzzinfer membership Gaussian "0 1" --start -3 --end 3 --resolution 6
    """
    if x_values:
        values = list(x_values)
    elif start is not None and end is not None:
        if resolution <= 0:
            _fail(f"Resolution must be positive, got {resolution}")
        values = np.linspace(start, end, resolution + 1).tolist()
    else:
        _fail("Give values with --x, or a range with --start and --end")

    try:
        term = FactoryManager.default().term.create(term_type, parameters, term_type)
        degrees = [term.membership(x) for x in values]
    except FuzzyError as e:
        _fail(_describe(e))

    table = Table(title=f"{term.class_name()} {term.parameters()}")
    table.add_column("x", style="cyan", justify="right")
    table.add_column("membership", style="green", justify="right")
    for x, degree in zip(values, degrees):
        table.add_row(op.str_value(x), op.str_value(degree))
    console.print(table)


@cli_app.command("terms")
def list_components(
    kind: Optional[str] = typer.Option(
        None,
        "--kind",
        "-k",
        help=f"Only list one kind ({', '.join(REGISTRY_KINDS)})",
    ),
):
    """List the names registered in the default factory manager."""
    if kind is not None and kind not in REGISTRY_KINDS:
        _fail(f"Unknown kind '{kind}'. Must be one of {list(REGISTRY_KINDS)}")

    manager = FactoryManager.default()
    table = Table(title="Registered components")
    table.add_column("Kind", style="cyan")
    table.add_column("Names", style="green")
    for name in REGISTRY_KINDS:
        if kind is None or kind == name:
            table.add_row(name, ", ".join(getattr(manager, name).available()))
    console.print(table)
