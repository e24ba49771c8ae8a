#!/usr/bin/env python3
"""
Example: reproduce the liana cutting figure

Runs the liberation simulation with the default parameters, prints the
scalar results, and saves the cumulative sequestration chart next to a
copy of the carbon table.

Usage:
    python examples/liana_cutting_figure.py [output_dir]
"""
import sys
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.table import Table

from lianasim import DataExporter, run_simulation
from lianasim.growth_plots import plot_sequestration

console = Console()


def show_trajectory(result) -> None:
    """Print per-hectare cumulative CO2e every five years."""
    table = Table(title="Cumulative Carbon Sequestered (Mg CO2e/ha)")
    table.add_column("Year", justify="right")
    table.add_column("Liberated", justify="right")
    table.add_column("Control", justify="right")
    table.add_column("Additional", justify="right", style="green")

    n = result.parameters.trees_per_ha
    for row in result.carbon_table.itertuples():
        if row.yr % 5:
            continue
        table.add_row(
            str(row.yr),
            f"{row.treated_CO2e * n:.2f}",
            f"{row.control_CO2e * n:.2f}",
            f"{row.additional_CO2e * n:.2f}",
        )
    console.print(table)


def main() -> None:
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("figures")

    result = run_simulation()
    show_trajectory(result)

    summary = result.summary
    console.print(f"\n[bold]Additional carbon by year {result.final_year}:[/bold] "
                  f"{summary.per_hectare:.1f} Mg CO2e/ha")
    console.print(f"Global potential: {summary.global_pg:.2f} Pg CO2e "
                  f"({summary.annual_pg:.3f} Pg CO2e/yr)")
    console.print(f"Cost: {summary.cost_per_mg_co2e:.2f} USD per Mg CO2e")

    figure_path = output_dir / f"sim_biomass_graph_{date.today().isoformat()}.png"
    plot_sequestration(result, save_path=figure_path)
    DataExporter(output_dir).export_carbon_table(result)
    console.print(f"\n[green]Figure saved to {figure_path}[/green]")


if __name__ == "__main__":
    main()
