"""CSV export of woven path chains.

Each chain is sampled and written to its own CSV file with the columns:
segment, t, x, y, heading
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .chain import PathChain
from .config import PATH_SAMPLES_PER_SEGMENT, TERM_BLUE, TERM_RESET

CSV_HEADER = ["segment", "t", "x", "y", "heading"]


class ChainExporter:
    """Writes sampled PathChains to CSV files.

    Attributes:
        run_dir: Directory that receives the chain_<i>.csv files.
        samples_per_path: Samples written for every path in a chain.
    """

    def __init__(
        self,
        output_dir: str = ".",
        run_dir: Optional[str] = None,
        samples_per_path: int = PATH_SAMPLES_PER_SEGMENT,
    ) -> None:
        """Initialize the exporter.

        Args:
            output_dir: Base directory for output files (default: current directory).
            run_dir: Optional specific run directory. If None, creates a
                timestamped directory under output_dir/results.
            samples_per_path: Samples written for every path in a chain.

        Raises:
            ValueError: If output_dir exists but is not a directory.
        """
        output_path = Path(output_dir)
        if output_path.exists() and not output_path.is_dir():
            raise ValueError(f"Output path exists but is not a directory: {output_dir}")

        if run_dir:
            self.run_dir = Path(run_dir)
        else:
            # results/weave_YYYYMMDD_HHMMSS/
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.run_dir = output_path / "results" / f"weave_{timestamp}"
        self.samples_per_path = samples_per_path

    def write_chain(self, chain: PathChain, index: int) -> Path:
        """Write one chain to run_dir/chain_<index>.csv and return the file path."""
        self.run_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.run_dir / f"chain_{index}.csv"
        samples = chain.sample(self.samples_per_path)

        with open(output_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for row in zip(samples["segment"], samples["t"], samples["x"], samples["y"], samples["heading"]):
                segment, t, x, y, heading = row
                writer.writerow([int(segment), f"{t:.6f}", f"{x:.6f}", f"{y:.6f}", f"{heading:.6f}"])

        return output_path

    def export(self, chains: Iterable[PathChain]) -> List[Path]:
        """Write every chain in order. Returns the written file paths."""
        written = [self.write_chain(chain, i) for i, chain in enumerate(chains)]
        logging.info(f"{TERM_BLUE}✓ Exported {len(written)} chain(s) to {self.run_dir}{TERM_RESET}")
        return written
