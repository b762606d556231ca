"""
Command-line entry point for scoring two profiles.

Usage:
    python -m compatibility_engine.run --profile-a a.json --profile-b b.json

Each profile file holds raw profile data keyed by dimension:

    {
      "values": ["honesty", "family"],
      "personality": {"extraversion": 4, "openness": 5},
      "interests": ["hiking", "music"],
      "goals": "long_term",
      "communication": {"style": "direct"}
    }

The compatibility payload is printed as JSON (or written to --output).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

import yaml

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger().setLevel(level)


def load_profile(filepath: str) -> Dict[str, Any]:
    """
    Load raw profile data from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a JSON object
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {filepath}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Profile file must contain a JSON object: {filepath}")
    return data


def score_profiles(
    profile_a_path: str,
    profile_b_path: str,
    config_path: Optional[str] = None,
    include_factors: bool = False
) -> Dict[str, Any]:
    """
    Score two profile files.

    Args:
        profile_a_path: Path to Person A's profile JSON
        profile_b_path: Path to Person B's profile JSON
        config_path: Optional configuration YAML (reference weights if None)
        include_factors: Whether to include the 0-100 score and factor list

    Returns:
        Compatibility payload dictionary
    """
    from .aggregation import DimensionAggregator, create_aggregator_from_config
    from .configs import get_config_value, load_config, validate_config

    if config_path is not None:
        config = load_config(config_path)
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")
        setup_logging(get_config_value(config, "global.log_level") or "INFO")
        aggregator = create_aggregator_from_config(config)
    else:
        aggregator = DimensionAggregator()

    profile_a = load_profile(profile_a_path)
    profile_b = load_profile(profile_b_path)

    result = aggregator.score(profile_a, profile_b)
    logger.info(f"Overall similarity: {result.overall:.4f}")

    payload = result.to_dict()
    if include_factors:
        payload["compatibilityScore"] = result.compatibility_score
        payload["compatibilityFactors"] = [f.to_dict() for f in result.to_factors()]
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for scoring."""
    parser = argparse.ArgumentParser(
        description="Score the compatibility of two profiles"
    )
    parser.add_argument(
        "--profile-a",
        type=str,
        required=True,
        help="Path to Person A's profile JSON"
    )
    parser.add_argument(
        "--profile-b",
        type=str,
        required=True,
        help="Path to Person B's profile JSON"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (reference weights if omitted)"
    )
    parser.add_argument(
        "--factors",
        action="store_true",
        help="Include the 0-100 compatibility score and factor list"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the payload to this file instead of stdout"
    )

    args = parser.parse_args(argv)

    try:
        payload = score_profiles(
            args.profile_a,
            args.profile_b,
            config_path=args.config,
            include_factors=args.factors
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Scoring failed: {e}")
        return 1

    text = json.dumps(payload, indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(text + "\n")
        logger.info(f"Saved compatibility payload to {args.output}")
    else:
        print(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
