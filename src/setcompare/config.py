"""Configuration dataclasses for comparison runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, List, Dict, Any

from setcompare.tracks.region import Region, parse_region

logger = logging.getLogger(__name__)


@dataclass
class ComparisonConfig:
    """Configuration for a two-group track comparison.

    Attributes:
        test: Statistic to compute per window ("ttest" or "mwu")
        set_a: bedGraph tracks of the first group (replicates)
        set_b: bedGraph tracks of the second group (replicates)
        output: Output bedGraph path for per-window p-values
        region: Optional chrom:start-finish restricting the comparison
        chunk_size: Records buffered per output write (default: 100000)
    """

    test: str
    set_a: List[Path]
    set_b: List[Path]
    output: Path
    region: Optional[str] = None
    chunk_size: int = 100_000

    def __post_init__(self):
        """Validate configuration."""
        self.set_a = [Path(p) for p in self.set_a]
        self.set_b = [Path(p) for p in self.set_b]
        self.output = Path(self.output)

        # Deferred: the reducer registry imports this module
        from setcompare.stats.api import REDUCERS

        if self.test not in REDUCERS:
            raise ValueError(f"test must be one of {list(REDUCERS)}, got {self.test}")

        for path in self.set_a + self.set_b:
            if not path.exists():
                raise FileNotFoundError(f"Track file not found: {path}")

        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

        if self.region is not None:
            # Fail early on malformed regions
            parse_region(self.region)

    @property
    def parsed_region(self) -> Optional[Region]:
        """Region as a (chrom, start, finish) tuple, if set."""
        if self.region is None:
            return None
        return parse_region(self.region)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dict with Path objects as strings."""
        d = asdict(self)
        d["set_a"] = [str(p) for p in self.set_a]
        d["set_b"] = [str(p) for p in self.set_b]
        d["output"] = str(self.output)
        return d
