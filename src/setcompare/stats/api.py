"""High-level API for running track comparisons."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from setcompare.config import ComparisonConfig
from setcompare.stats.base import ConfigurationError, SetComparison
from setcompare.stats.mannwhitney import MWUReduction
from setcompare.stats.ttest import TTestReduction
from setcompare.tracks.iterator import TrackIterator
from setcompare.tracks.loaders import load_bedgraph
from setcompare.tracks.multiset import Multiset
from setcompare.tracks.writer import write_bedgraph

logger = logging.getLogger(__name__)

REDUCERS = {
    "ttest": TTestReduction,
    "mwu": MWUReduction,
}


def build_reducer(test: str, multi: Multiset) -> SetComparison:
    """Instantiate the reducer registered for ``test`` over ``multi``.

    Raises:
        ConfigurationError: If the test is unknown or the groups do not fit it
    """
    try:
        reducer_cls = REDUCERS[test]
    except KeyError:
        raise ConfigurationError(
            f"Unknown test '{test}'. Available: {sorted(REDUCERS)}"
        ) from None
    return reducer_cls(multi)


def open_group(paths: List[Path]) -> List[TrackIterator]:
    """Load the tracks of one group as iterators."""
    return [TrackIterator(load_bedgraph(p), name=Path(p).name) for p in paths]


def run_comparison_from_config(config: ComparisonConfig) -> Dict[str, Any]:
    """Run a two-group comparison and write per-window p-values.

    Args:
        config: Comparison configuration

    Returns:
        Dictionary with keys: output, n_records, test, n1, n2, region, config
    """
    params = config.to_dict()
    logger.info(f"Starting {config.test} comparison")
    logger.info(f"  Group A: {params['set_a']}")
    logger.info(f"  Group B: {params['set_b']}")
    logger.debug(f"  Config: {params}")

    multi = Multiset([open_group(config.set_a), open_group(config.set_b)])
    reducer = build_reducer(config.test, multi)

    region = config.parsed_region
    if region is not None:
        logger.info(f"  Region: {region}")
        reducer.seek(region.chrom, region.start, region.finish)

    n_records = write_bedgraph(reducer, config.output, chunk_size=config.chunk_size)

    logger.info(f"Comparison complete: {n_records} windows written to {config.output}")
    return {
        "output": config.output,
        "n_records": n_records,
        "test": config.test,
        "n1": reducer.n1,
        "n2": reducer.n2,
        "region": str(region) if region is not None else None,
        "config": params,
    }


def run_comparison(
    test: str,
    set_a: List[Union[str, Path]],
    set_b: List[Union[str, Path]],
    output: Union[str, Path],
    region: Optional[str] = None,
    chunk_size: int = 100_000,
) -> Dict[str, Any]:
    """Run a two-group comparison (convenience wrapper).

    Args:
        test: "ttest" or "mwu"
        set_a: bedGraph tracks of the first group
        set_b: bedGraph tracks of the second group
        output: Output bedGraph path
        region: Optional chrom:start-finish restricting the comparison
        chunk_size: Records buffered per output write

    Returns:
        Summary dictionary (see :func:`run_comparison_from_config`)
    """
    config = ComparisonConfig(
        test=test,
        set_a=set_a,
        set_b=set_b,
        output=output,
        region=region,
        chunk_size=chunk_size,
    )
    return run_comparison_from_config(config)
