import sys

import pytest
import yaml
from loguru import logger

from sleepstages.catalog import create_catalog
from sleepstages.catalog.build_catalog import PROGRESSIVE_ORDER, UNLOCK_THRESHOLD, build_catalog
from sleepstages.catalog.create_catalog import StageCatalogCreator


def _write_config(tmp_path, **overrides):
    config = {
        'assets': {
            'image_dir': 'imgs',
            'extensions': ['png', 'jpg', 'jpeg'],
            'url_prefix': '/sleep-imgs/',
        },
        'options': {'verbose': False, 'sort_by_file_name': False},
        'logging': {'log_dir': None},
    }
    for section, values in overrides.items():
        config[section].update(values)
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.safe_dump(config))
    return config_path


@pytest.fixture
def image_dir(tmp_path):
    imgs = tmp_path / 'imgs'
    imgs.mkdir()
    for name in ('w-1.png', 'R-2.jpg', 'x-3.png', 'n3-1.jpeg', 'n3-0.png'):
        (imgs / name).write_bytes(b'')
    return imgs


def test_run_builds_snapshot(tmp_path, image_dir):
    creator = StageCatalogCreator(str(_write_config(tmp_path)))
    catalog = creator.run()

    assert creator.image_dir == image_dir
    assert creator.catalog is catalog
    assert len(catalog) == 4
    assert catalog.skipped == ((image_dir / 'x-3.png').as_posix(),)
    assert catalog.progressive_order == PROGRESSIVE_ORDER
    assert catalog.unlock_threshold == UNLOCK_THRESHOLD
    assert {entry.src for entry in catalog.entries_for_stage('n3')} == {
        '/sleep-imgs/n3-0.png',
        '/sleep-imgs/n3-1.jpeg',
    }


def test_run_matches_build_catalog(tmp_path, image_dir):
    creator = StageCatalogCreator(str(_write_config(tmp_path)))
    raw = creator.discover()
    assert creator.run().entries == build_catalog(raw)


def test_sort_by_file_name_option(tmp_path, image_dir):
    config_path = _write_config(tmp_path, options={'sort_by_file_name': True})
    catalog = StageCatalogCreator(str(config_path)).run()
    names = [entry.file_name for entry in catalog.entries]
    assert names == sorted(names)


def test_image_dir_override(tmp_path, image_dir):
    other = tmp_path / 'other'
    other.mkdir()
    (other / 'n1-9.png').write_bytes(b'')

    creator = StageCatalogCreator(str(_write_config(tmp_path)), image_dir=str(other))
    catalog = creator.run()

    assert [entry.stage_key for entry in catalog.entries] == ['n1']


def test_log_file_written(tmp_path, image_dir):
    log_dir = tmp_path / 'logs'
    creator = StageCatalogCreator(str(_write_config(tmp_path, logging={'log_dir': str(log_dir)})))
    creator.run()

    log_files = list(log_dir.glob('stage_catalog_*.log'))
    assert len(log_files) == 1


def test_missing_assets_section(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.safe_dump({'options': {'verbose': False}}))
    with pytest.raises(KeyError):
        StageCatalogCreator(str(config_path))


def test_missing_image_dir_raises(tmp_path):
    creator = StageCatalogCreator(str(_write_config(tmp_path)))
    with pytest.raises(FileNotFoundError):
        creator.run()


def test_main_exits_on_missing_image_dir(tmp_path, monkeypatch):
    config_path = _write_config(tmp_path)
    monkeypatch.setattr(sys, 'argv', ['sleepstages-catalog', '--config', str(config_path)])
    with pytest.raises(SystemExit) as excinfo:
        create_catalog.main()
    assert excinfo.value.code == 1


def test_main_reports_catalog(tmp_path, image_dir, monkeypatch):
    messages = []
    setup_logging = StageCatalogCreator.setup_logging

    def setup_logging_with_capture(self):
        setup_logging(self)
        logger.add(lambda message: messages.append(message.record['message']), level='INFO')

    monkeypatch.setattr(StageCatalogCreator, 'setup_logging', setup_logging_with_capture)
    config_path = _write_config(tmp_path)
    monkeypatch.setattr(sys, 'argv', ['sleepstages-catalog', '--config', str(config_path)])

    create_catalog.main()

    assert 'Found 5 image files' in messages
    assert 'Catalog contains 4 classified images' in messages
    assert 'Skipped 1 files without a stage prefix' in messages
    assert '  Wake  1' in messages
    assert '  REM   1' in messages
    assert '  N3    2' in messages
    assert '  1. REM (1 images)' in messages
    assert '  2. N3 (2 images)' in messages
    assert 'Catalog creation complete!' in messages


def test_relative_config_resolved_from_cwd(tmp_path, image_dir, monkeypatch):
    _write_config(tmp_path)
    monkeypatch.chdir(tmp_path)

    creator = StageCatalogCreator('config.yaml')
    catalog = creator.run()

    assert creator.config_path.resolve() == (tmp_path / 'config.yaml').resolve()
    assert len(catalog) == 4


def test_empty_config_file(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text('')
    with pytest.raises(KeyError, match='assets'):
        StageCatalogCreator(str(config_path))



def test_default_config_ships_with_package():
    config_path = StageCatalogCreator.resolve_config_path('config_stage_catalog.yaml')
    assert config_path.exists()
    config = yaml.safe_load(config_path.read_text())
    assert config['assets']['extensions'] == ['png', 'jpg', 'jpeg']
