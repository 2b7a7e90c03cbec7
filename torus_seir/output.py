"""
Result Output
=============
Writes one CSV per simulation run
"""

import pandas as pd
from pathlib import Path
from typing import Union


class OutputError(RuntimeError):
    """The output location could not be created or the artifact written"""


class CsvResultWriter:
    """
    Per-run CSV sink

    Files are named <prefix>_<run_number>.csv inside output_dir.
    """

    def __init__(self,
                 output_dir: Union[str, Path] = './simulation_results',
                 prefix: str = 'simulation_result'):
        self.output_dir = Path(output_dir)
        self.prefix = prefix

    def prepare(self):
        """Create the output directory if needed"""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Cannot create output directory '{self.output_dir}': {e}") from e

    def path_for(self, run_number: int) -> Path:
        return self.output_dir / f"{self.prefix}_{run_number}.csv"

    def write(self, run_number: int, results: pd.DataFrame) -> Path:
        """
        Write a results table (header + one row per day)

        A partially written file is removed before the error is raised.
        """
        path = self.path_for(run_number)
        try:
            results.to_csv(path, index=False)
        except OSError as e:
            if path.is_file():
                path.unlink()
            raise OutputError(f"Cannot write '{path}': {e}") from e
        return path
