"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the scoring section.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from ..aggregation.dimension_aggregator import is_valid_weight
from ..profiles.schema import DIMENSIONS, MAX_DEPTH_LIMIT

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a mapping: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    if "scoring" not in config:
        issues.append("Missing required section: scoring")
        return issues

    scoring = config["scoring"] or {}
    if not isinstance(scoring, dict):
        issues.append(f"scoring must be a mapping, got {type(scoring).__name__}")
        return issues

    weights = scoring.get("weights")
    if weights is None:
        issues.append("Missing scoring.weights (reference weights will be used)")
    elif not isinstance(weights, dict):
        issues.append(f"scoring.weights must be a mapping, got {type(weights).__name__}")
    else:
        valid_total = True
        for dim, weight in weights.items():
            if dim not in DIMENSIONS:
                issues.append(f"Unknown dimension in scoring.weights: {dim}")
            if not is_valid_weight(weight):
                issues.append(f"Weight for {dim} must be a finite non-negative number, got {weight}")
                valid_total = False

        # Weights are re-normalized at scoring time, so this is only a note
        if valid_total:
            total = sum(weights.values())
            if total == 0:
                issues.append("Dimension weights sum to 0; every overall score will be 0")
            elif abs(total - 1.0) > 0.01:
                issues.append(f"Dimension weights don't sum to 1 ({total}); they will be re-normalized")

    max_depth = scoring.get("max_depth")
    if max_depth is not None:
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            issues.append(f"scoring.max_depth must be a positive integer, got {max_depth}")
        elif max_depth > MAX_DEPTH_LIMIT:
            issues.append(f"scoring.max_depth must be at most {MAX_DEPTH_LIMIT}, got {max_depth}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.values")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
