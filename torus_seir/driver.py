"""
Batch Driver
============
Runs many independent, reproducibly seeded simulations in sequence

Usage:
    python -m torus_seir --runs 100 --pause 60
"""

import argparse
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, List, Optional

from .core.random_source import RandomSource
from .core.seir_model import SimulationConfig, SimulationManager
from .output import CsvResultWriter, OutputError


@dataclass
class BatchConfig:
    """Configuration for a batch of runs"""
    n_runs: int = 100
    first_seed: int = 0
    pause_seconds: float = 60.0  # Pause between consecutive runs
    output_dir: str = './simulation_results'


@dataclass
class RunRecord:
    """Outcome of one run in a batch"""
    run_number: int
    seed: int
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_batch(batch: BatchConfig,
              sim_config: Optional[SimulationConfig] = None,
              writer: Optional[CsvResultWriter] = None,
              verbose: bool = True,
              sleep: Callable[[float], None] = time.sleep) -> List[RunRecord]:
    """
    Run batch.n_runs simulations one after another

    Run i is seeded with first_seed + i and written as run number i + 1.
    An output failure aborts only the current run.

    Args:
        batch: Batch configuration
        sim_config: Template for every run (seed is overridden per run)
        writer: Output sink (CsvResultWriter on batch.output_dir if None)
        verbose: Print per-run progress
        sleep: Pause function, injectable for tests

    Returns:
        One RunRecord per run
    """
    if sim_config is None:
        sim_config = SimulationConfig()
    if writer is None:
        writer = CsvResultWriter(batch.output_dir)

    records = []

    for i in range(batch.n_runs):
        seed = batch.first_seed + i
        run_number = i + 1
        record = RunRecord(run_number=run_number, seed=seed)

        # Fresh, reseeded random source per run
        rng = RandomSource(seed)
        simulator = SimulationManager(replace(sim_config, seed=seed), rng=rng)

        try:
            simulator.run_simulation(run_number, writer)
            record.path = writer.path_for(run_number)
            if verbose:
                print(f"Simulation {run_number} (seed {seed}) written to {record.path}")
        except OutputError as e:
            record.error = str(e)
            print(f"Simulation {run_number} failed: {e}")

        records.append(record)

        if i < batch.n_runs - 1 and batch.pause_seconds > 0:
            if verbose:
                print(f"Waiting {batch.pause_seconds:g}s...")
            sleep(batch.pause_seconds)

    if verbose:
        n_failed = sum(1 for r in records if not r.ok)
        print(f"\nBatch complete: {len(records) - n_failed} written, {n_failed} failed")

    return records


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Run a batch of toroidal-grid SEIR simulations")
    ap.add_argument("--runs", type=int, default=100)
    ap.add_argument("--first-seed", type=int, default=0)
    ap.add_argument("--pause", type=float, default=60.0,
                    help="seconds to wait between runs")
    ap.add_argument("--output-dir", default="./simulation_results")
    ap.add_argument("--days", type=int, default=730)
    ap.add_argument("--width", type=int, default=300)
    ap.add_argument("--height", type=int, default=300)
    ap.add_argument("--susceptible", type=int, default=19_980)
    ap.add_argument("--infected", type=int, default=20)
    ap.add_argument("--quiet", action="store_true")
    args = ap.parse_args(argv)

    batch = BatchConfig(
        n_runs=args.runs,
        first_seed=args.first_seed,
        pause_seconds=args.pause,
        output_dir=args.output_dir
    )
    sim_config = SimulationConfig(
        width=args.width,
        height=args.height,
        n_susceptible=args.susceptible,
        n_infected=args.infected,
        total_days=args.days
    )

    records = run_batch(batch, sim_config, verbose=not args.quiet)
    return 0 if all(r.ok for r in records) else 1


if __name__ == "__main__":
    raise SystemExit(main())
