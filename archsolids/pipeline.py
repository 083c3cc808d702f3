"""
Build pipeline for archsolids.
Builds the arches and roofs listed in a configuration and exports them.
"""

import argparse
import copy
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import numpy as np
import trimesh
import yaml
from pydantic import ValidationError
from shapely.geometry import Polygon

from .builders import Builders, Unsupported, init
from .families import TrimFamilyProvider
from .geometry import GeometryKernel, Shape, is_region
from .utils.error_handling import (
    ConfigError,
    ErrorCategory,
    ErrorSeverity,
    TrimFamilyNotFoundError,
    handle_error
)
from .utils.logger import log_config, setup_logger

logger = logging.getLogger(__name__)

BuildFunction = Callable[[Builders, Dict[str, Any], Optional[Polygon]], Union[Shape, Unsupported]]

BUILDERS: Dict[str, BuildFunction] = {
    'one_pt_arch': lambda b, params, profile: b.arches.one_pt_arch(params, profile),
    'two_pt_arch': lambda b, params, profile: b.arches.two_pt_arch(params, profile),
    'three_pt_arch': lambda b, params, profile: b.arches.three_pt_arch(params, profile),
    'four_pt_arch': lambda b, params, profile: b.arches.four_pt_arch(params, profile),
    'shed_roof': lambda b, params, profile: b.roofs.build_shed_roof(params),
    'gable_roof': lambda b, params, profile: b.roofs.build_gable_roof(params),
    'hip_roof': lambda b, params, profile: b.roofs.build_hip_roof(params),
}


def default_config() -> Dict[str, Any]:
    """Get default pipeline configuration."""
    return {
        'kernel': {
            'segments': 48,
            'boolean_engine': 'manifold'
        },
        'export': {
            'file_type': 'stl',
            'region_file_type': 'svg'
        },
        'logging': {
            'level': 'INFO',
            'file': None
        },
        'builds': []
    }


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config: Union[str, Path, Dict[str, Any], None] = None) -> Dict[str, Any]:
    """
    Load pipeline configuration and merge it over the defaults.

    Args:
        config: YAML file path, a configuration dict, or None for defaults

    Returns:
        Complete configuration dict
    """
    if config is None:
        return default_config()

    if isinstance(config, (str, Path)):
        with open(config, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    else:
        loaded = config

    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(loaded).__name__}")
    if not isinstance(loaded.get('builds', []), list):
        raise ConfigError("'builds' must be a list of build requests")

    return _merge(default_config(), loaded)


class ArchSolidsPipeline:
    """Builds and exports the elements listed in a configuration."""

    def __init__(self, config: Union[str, Path, Dict[str, Any], None] = None):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration or path to a YAML file
        """
        self.config = load_config(config)
        self.builders: Optional[Builders] = None

    def initialize(self):
        """Create the geometry kernel, trim families and builders."""
        kernel_config = self.config['kernel']
        kernel = GeometryKernel(
            segments=kernel_config['segments'],
            boolean_engine=kernel_config['boolean_engine']
        )
        self.builders = init(kernel, TrimFamilyProvider(kernel))
        logger.info(f"Pipeline initialized with {kernel!r}")

    def build(self, request: Dict[str, Any]) -> Union[Shape, Unsupported]:
        """
        Build a single element.

        Args:
            request: Build request with 'builder', 'params' and optional 'profile'

        Returns:
            Region, solid or Unsupported
        """
        if self.builders is None:
            self.initialize()

        builder_name = request.get('builder')
        if builder_name not in BUILDERS:
            raise ConfigError(
                f"Unknown builder {builder_name!r}; expected one of {', '.join(sorted(BUILDERS))}"
            )

        profile = self._profile(request.get('profile'))
        return BUILDERS[builder_name](self.builders, request.get('params', {}), profile)

    def process(self, output_dir: Union[str, Path]) -> Dict[str, Any]:
        """
        Build and export every configured element.

        Args:
            output_dir: Directory for exported files

        Returns:
            Processing results with one entry per build
        """
        start_time = time.time()
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        builds = self.config.get('builds', [])
        logger.info(f"Processing {len(builds)} builds into {output_dir}")

        results: List[Dict[str, Any]] = []
        for index, request in enumerate(builds):
            name = request.get('name') or f"{request.get('builder', 'build')}_{index}"
            results.append(self._process_one(name, request, output_dir))

        return {
            'success': all(result['success'] for result in results),
            'builds': results,
            'output_files': [result['output_file'] for result in results if result.get('output_file')],
            'processing_time': time.time() - start_time
        }

    def _process_one(self, name: str, request: Dict[str, Any], output_dir: Path) -> Dict[str, Any]:
        try:
            logger.info(f"Building {name} with {request.get('builder')}")
            shape = self.build(request)

            if isinstance(shape, Unsupported):
                logger.warning(f"Skipping {name}: {shape.feature} is {shape.reason}")
                return {'name': name, 'success': True, 'supported': False, 'output_file': None}

            output_file = self._export(shape, output_dir / name)
            return {
                'name': name,
                'success': True,
                'supported': True,
                'output_file': str(output_file),
                'metadata': describe_shape(shape)
            }
        except Exception as e:
            handle_error(e, f"build:{name}", ErrorSeverity.HIGH, _error_category(e))
            return {'name': name, 'success': False, 'supported': True, 'output_file': None, 'error': str(e)}

    def _export(self, shape: Shape, stem: Path) -> Path:
        export_config = self.config['export']
        if is_region(shape):
            path = stem.with_suffix(f".{export_config['region_file_type']}")
            trimesh.load_path(shape).export(str(path))
        else:
            path = stem.with_suffix(f".{export_config['file_type']}")
            shape.export(str(path))
        logger.info(f"Exported {path}")
        return path

    def _profile(self, profile_config: Optional[Dict[str, Any]]) -> Optional[Polygon]:
        """Build a profile from {'points': [...]} or {'rectangle': [w, h]}."""
        if profile_config is None:
            return None
        kernel = self.builders.kernel
        if 'points' in profile_config:
            return kernel.align(kernel.region_from_points(profile_config['points']), ['center', 'center'])
        if 'rectangle' in profile_config:
            return kernel.rectangle(profile_config['rectangle'])
        raise ConfigError(f"Profile needs 'points' or 'rectangle', got {sorted(profile_config)}")


def _error_category(exception: Exception) -> ErrorCategory:
    if isinstance(exception, ConfigError):
        return ErrorCategory.CONFIGURATION
    if isinstance(exception, TrimFamilyNotFoundError):
        return ErrorCategory.TRIM_FAMILY
    if isinstance(exception, ValidationError):
        return ErrorCategory.INPUT_VALIDATION
    if isinstance(exception, OSError):
        return ErrorCategory.EXPORT_ERROR
    return ErrorCategory.GEOMETRY_PROCESSING


def describe_shape(shape: Shape) -> Dict[str, Any]:
    """Summary measurements of a region or solid."""
    if is_region(shape):
        min_x, min_y, max_x, max_y = shape.bounds
        return {
            'kind': 'region',
            'area': float(shape.area),
            'extents': [float(max_x - min_x), float(max_y - min_y)]
        }
    return {
        'kind': 'solid',
        'volume': float(shape.volume),
        'extents': np.asarray(shape.extents, dtype=float).tolist(),
        'watertight': bool(shape.is_watertight),
        'total_vertices': len(shape.vertices),
        'total_faces': len(shape.faces)
    }


def run_pipeline(config: Union[str, Path, Dict[str, Any]], output_dir: Union[str, Path]) -> Dict[str, Any]:
    """
    Convenience function to run the complete pipeline.

    Args:
        config: Pipeline configuration or YAML path
        output_dir: Output directory for results

    Returns:
        Processing results
    """
    pipeline = ArchSolidsPipeline(config)
    pipeline.initialize()
    return pipeline.process(output_dir)


def main(argv: Optional[List[str]] = None):
    """Command line entry point."""
    parser = argparse.ArgumentParser(description='archsolids build pipeline')
    parser.add_argument('--config', required=True, help='YAML config path')
    parser.add_argument('--output', required=True, help='Output directory')
    parser.add_argument('--log-file', default=None, help='Optional log file')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    pipe = ArchSolidsPipeline(args.config)
    logging_config = pipe.config['logging']
    root_logger = setup_logger(
        'archsolids',
        level='DEBUG' if args.verbose else logging_config['level'],
        log_file=args.log_file or logging_config['file']
    )
    log_config(pipe.config, root_logger)
    pipe.initialize()
    res = pipe.process(args.output)
    print(json.dumps(res, indent=2))
    return 0 if res['success'] else 1


if __name__ == "__main__":
    raise SystemExit(main())
