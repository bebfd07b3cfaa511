"""Glue helpers exposed for CLI and integration harnesses."""

from .io import (
    build_distance_matrix,
    build_stage_matrix,
    compute_euclid,
    load_config,
    load_coords,
    load_items,
    load_matrix,
    parse_edge_list,
    parse_packages,
)
from .pipeline import (
    assemble_problem,
    build_arg_parser,
    build_params,
    load_and_run,
    main,
    run_pipeline,
    summarize,
)

__all__ = [
    "assemble_problem",
    "build_arg_parser",
    "build_distance_matrix",
    "build_params",
    "build_stage_matrix",
    "compute_euclid",
    "load_and_run",
    "load_config",
    "load_coords",
    "load_items",
    "load_matrix",
    "main",
    "parse_edge_list",
    "parse_packages",
    "run_pipeline",
    "summarize",
]
