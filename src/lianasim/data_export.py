"""
Export of simulation results to CSV, JSON, Excel and YAML.
"""
import json
from pathlib import Path
from typing import Dict, Union, TYPE_CHECKING

import pandas as pd
import yaml

from .exceptions import ExportError
from .logging_config import get_logger

if TYPE_CHECKING:
    from .simulation import SimulationResult

TABLE_FORMATS = ('csv', 'json', 'excel')
SUMMARY_FORMATS = ('yaml', 'json')


class DataExporter:
    """Writes simulation tables and summaries to an output directory."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = get_logger(__name__)

    def _write_table(self, df: pd.DataFrame, stem: str, format: str) -> Path:
        if format == 'csv':
            path = self.output_dir / f"{stem}.csv"
            df.to_csv(path, index=False)
        elif format == 'json':
            path = self.output_dir / f"{stem}.json"
            df.to_json(path, orient='records', indent=2)
        elif format == 'excel':
            path = self.output_dir / f"{stem}.xlsx"
            try:
                df.to_excel(path, index=False)
            except ImportError as e:
                raise ExportError(f"Excel export requires openpyxl: {e}") from e
        else:
            raise ExportError(f"Unsupported table format '{format}'. Supported: {list(TABLE_FORMATS)}")
        self.logger.info(f"Exported {stem} to {path}")
        return path

    def export_carbon_table(self, result: 'SimulationResult', format: str = 'csv') -> Path:
        """Export the per-tree carbon table.

        Args:
            result: Simulation result
            format: 'csv', 'json' or 'excel'

        Returns:
            Path of the written file
        """
        return self._write_table(result.carbon_table, 'carbon_table', format)

    def export_liana_table(self, result: 'SimulationResult', format: str = 'csv') -> Path:
        """Export liana diameters, biomass and CO2e by year."""
        data = {'yr': result.years}
        for i, (dbh, agb) in enumerate(zip(result.liana.diameters, result.liana.agb_by_liana), start=1):
            data[f'liana{i}_dbh'] = dbh
            data[f'liana{i}_AGB'] = agb
        data['liana_AGB'] = result.liana.agb
        data['liana_BGB'] = result.liana.bgb
        data['liana_BM'] = result.liana.total
        data['liana_CO2e'] = result.liana.co2e
        return self._write_table(pd.DataFrame(data), 'liana_table', format)

    def export_summary(self, result: 'SimulationResult', format: str = 'yaml') -> Path:
        """Export the scalar results together with the parameters used.

        Args:
            result: Simulation result
            format: 'yaml' or 'json'

        Returns:
            Path of the written file
        """
        payload = {
            'summary': {k: float(v) for k, v in result.summary.to_dict().items()},
            'final_per_hectare': result.final_per_hectare(),
            'parameters': result.parameters.to_dict(),
        }
        if format == 'yaml':
            path = self.output_dir / 'summary.yaml'
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(payload, f, default_flow_style=False, sort_keys=False)
        elif format == 'json':
            path = self.output_dir / 'summary.json'
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)
        else:
            raise ExportError(f"Unsupported summary format '{format}'. Supported: {list(SUMMARY_FORMATS)}")
        self.logger.info(f"Exported summary to {path}")
        return path

    def export_all(self, result: 'SimulationResult', format: str = 'csv') -> Dict[str, Path]:
        """Export tables in ``format`` and the summary as YAML."""
        return {
            'carbon_table': self.export_carbon_table(result, format),
            'liana_table': self.export_liana_table(result, format),
            'summary': self.export_summary(result, 'yaml'),
        }
