import logging
import math
from pathlib import Path

import pytest
import yaml

from archsolids.pipeline import ArchSolidsPipeline, load_config, main, run_pipeline
from archsolids.utils.error_handling import ConfigError


ROOF = {
    'roofSpanSize': [6, 4],
    'roofPitch': math.atan(0.5),
    'wallThickness': 0.3,
    'trimUnitSize': [0.15, 0.15],
}


def _config():
    return {
        'builds': [
            {'name': 'window_head', 'builder': 'one_pt_arch', 'params': {'arcRadius': 2}},
            {
                'name': 'gate',
                'builder': 'two_pt_arch',
                'params': {'arcRadius': 3, 'archWidth': 4},
                'profile': {'rectangle': [0.5, 0.4]}
            },
            {'name': 'porch', 'builder': 'shed_roof', 'params': ROOF},
            {'name': 'hall', 'builder': 'hip_roof', 'params': ROOF},
        ]
    }


def test_load_config_defaults():
    config = load_config()

    assert config['kernel'] == {'segments': 48, 'boolean_engine': 'manifold'}
    assert config['export']['file_type'] == 'stl'
    assert config['logging'] == {'level': 'INFO', 'file': None}
    assert config['builds'] == []


def test_load_config_merges_yaml_over_defaults(tmp_path):
    path = tmp_path / 'build.yaml'
    path.write_text(yaml.safe_dump({'kernel': {'segments': 24}, 'builds': [{'builder': 'gable_roof'}]}))

    config = load_config(path)

    assert config['kernel'] == {'segments': 24, 'boolean_engine': 'manifold'}
    assert config['export']['region_file_type'] == 'svg'
    assert config['builds'] == [{'builder': 'gable_roof'}]


@pytest.mark.parametrize('bad', [['not', 'a', 'mapping'], {'builds': {'one': 1}}])
def test_load_config_rejects_malformed_config(bad):
    with pytest.raises(ConfigError):
        load_config(bad)


def test_unknown_builder_raises():
    pipeline = ArchSolidsPipeline()

    with pytest.raises(ConfigError):
        pipeline.build({'builder': 'dome'})


def test_profile_from_points_is_centred():
    pipeline = ArchSolidsPipeline()
    pipeline.initialize()

    profile = pipeline._profile({'points': [[0, 0], [2, 0], [2, 1], [0, 1]]})

    assert profile.bounds == pytest.approx((-1, -0.5, 1, 0.5))


def test_run_pipeline_exports_supported_builds(tmp_path):
    res = run_pipeline(_config(), tmp_path / 'out')

    assert res['success'] is True
    assert isinstance(res['processing_time'], float)

    by_name = {build['name']: build for build in res['builds']}
    assert Path(by_name['window_head']['output_file']).suffix == '.svg'
    assert by_name['window_head']['metadata']['kind'] == 'region'
    assert by_name['gate']['metadata']['extents'][0] == pytest.approx(5.0, rel=1e-3)
    assert Path(by_name['porch']['output_file']).suffix == '.stl'
    assert by_name['porch']['metadata']['volume'] > 0

    assert by_name['hall']['supported'] is False
    assert by_name['hall']['output_file'] is None

    assert len(res['output_files']) == 3
    for output_file in res['output_files']:
        assert Path(output_file).exists(), f"{output_file} not found"


def test_failed_build_is_reported(tmp_path):
    config = {'builds': [{'name': 'broken', 'builder': 'two_pt_arch', 'params': {'arcRadius': 1, 'archWidth': 5}}]}
    res = run_pipeline(config, tmp_path)

    assert res['success'] is False
    assert res['builds'][0]['error']
    assert res['output_files'] == []


def test_main_runs_from_yaml(tmp_path, capsys):
    config_path = tmp_path / 'build.yaml'
    config_path.write_text(yaml.safe_dump({
        'export': {'file_type': 'ply'},
        'builds': [{'name': 'door', 'builder': 'one_pt_arch', 'params': {'arcRadius': 1},
                    'profile': {'rectangle': [0.2, 0.2]}}]
    }))

    try:
        code = main(['--config', str(config_path), '--output', str(tmp_path / 'out')])
    finally:
        logging.getLogger('archsolids').handlers.clear()

    assert code == 0
    assert (tmp_path / 'out' / 'door.ply').exists()
    assert '"success": true' in capsys.readouterr().out


def test_main_logs_to_the_configured_file(tmp_path, capsys):
    log_file = tmp_path / 'build.log'
    config_path = tmp_path / 'build.yaml'
    config_path.write_text(yaml.safe_dump({
        'logging': {'level': 'DEBUG', 'file': str(log_file)},
        'builds': [{'name': 'lintel', 'builder': 'one_pt_arch', 'params': {'arcRadius': 1}}]
    }))

    root_logger = logging.getLogger('archsolids')
    try:
        code = main(['--config', str(config_path), '--output', str(tmp_path / 'out')])
        level = root_logger.level
    finally:
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.NOTSET)

    assert code == 0
    assert level == logging.DEBUG
    assert 'Building lintel with one_pt_arch' in log_file.read_text()
