"""
Command line entry point for LianaSim.

Usage:
    lianasim                                  # default parameters, summary only
    lianasim --output-dir results             # also write figure and tables
    lianasim --config my_params.yaml -v       # custom parameter file
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .data_export import DataExporter, TABLE_FORMATS
from .exceptions import LianaSimError, validate_positive
from .logging_config import setup_logging
from .parameters import SimulationParameters
from .simulation import CONTROL_LABEL, LIBERATED_LABEL, SimulationResult, run_simulation

FIGURE_NAME = 'sequestration.png'

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lianasim',
        description="Simulate carbon gains from liberating trees from lianas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lianasim                              # Run with default parameters
  lianasim --years 40 --trees-per-ha 8  # Override simulation settings
  lianasim --output-dir results         # Save figure, tables and summary
        """
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Parameter file (YAML, TOML or JSON)"
    )
    parser.add_argument(
        "--years",
        type=int,
        help="Length of the simulation period in years"
    )
    parser.add_argument(
        "--trees-per-ha",
        type=int,
        help="Number of trees liberated per hectare"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for the figure and exported results"
    )
    parser.add_argument(
        "--format",
        choices=list(TABLE_FORMATS),
        default="csv",
        help="Format for exported tables"
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Do not render the sequestration figure"
    )
    parser.add_argument(
        "--dpi",
        type=int,
        default=600,
        help="Resolution of the saved figure"
    )
    parser.add_argument(
        "--show-fill",
        action="store_true",
        help="Shade the area between liberated and control curves"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    return parser


def load_parameters(args: argparse.Namespace) -> SimulationParameters:
    params = SimulationParameters.from_config(args.config)
    overrides = {}
    if args.years is not None:
        overrides['years'] = int(validate_positive(args.years, 'years'))
    if args.trees_per_ha is not None:
        overrides['trees_per_ha'] = int(validate_positive(args.trees_per_ha, 'trees_per_ha'))
    return params.with_overrides(**overrides) if overrides else params


def print_summary(result: SimulationResult) -> None:
    """Print the scalar results as a rich table."""
    params = result.parameters
    final = result.final_per_hectare()

    table = Table(title=f"Liana Cutting: {params.trees_per_ha} Trees/ha over {result.final_year} Years")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Units", style="dim")

    table.add_row(f"{LIBERATED_LABEL} (year {result.final_year})", f"{final[LIBERATED_LABEL]:.2f}", "Mg CO2e/ha")
    table.add_row(f"{CONTROL_LABEL} (year {result.final_year})", f"{final[CONTROL_LABEL]:.2f}", "Mg CO2e/ha")
    table.add_row("Additional CO2e", f"{result.summary.per_hectare:.3f}", "Mg CO2e/ha")
    table.add_row("Global potential", f"{result.summary.global_pg:.4f}", "Pg CO2e")
    table.add_row("Annual potential", f"{result.summary.annual_pg:.5f}", "Pg CO2e/yr")
    table.add_row("Treatment cost", f"{result.summary.cost_per_mg_co2e:.4f}", "USD/Mg CO2e")

    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the liana cutting simulation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging('DEBUG' if args.verbose else 'WARNING')

    console.print(Panel.fit(
        "[bold]LianaSim[/bold]\n"
        "[dim]Carbon gains from liberating trees from lianas[/dim]",
        border_style="bold blue"
    ))

    try:
        params = load_parameters(args)
        result = run_simulation(params)
        print_summary(result)

        if args.output_dir is not None:
            exporter = DataExporter(args.output_dir)
            paths = exporter.export_all(result, args.format)
            for name, path in paths.items():
                console.print(f"[green]Wrote {name}: {path}[/green]")

            if not args.no_plot:
                # Deferred so that --no-plot runs never import matplotlib
                from .growth_plots import plot_sequestration
                figure_path = args.output_dir / FIGURE_NAME
                plot_sequestration(result, save_path=figure_path,
                                   show_fill=args.show_fill, dpi=args.dpi)
                console.print(f"[green]Wrote figure: {figure_path}[/green]")
    except LianaSimError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
