"""Tests for utility functions."""
import json
import logging
import tempfile
from pathlib import Path

import pandas as pd

from senate_sync.utils import convert_to_csv, save_json, setup_logging, setup_project_paths


def test_save_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        data = {'committee': 'Health', 'members': ['m-1', 'm-2']}
        path = Path(tmpdir) / 'nested' / 'summary.json'
        assert save_json(data, path) is True
        assert path.exists()
        with path.open('r') as f:
            assert json.load(f) == data


def test_convert_to_csv():
    with tempfile.TemporaryDirectory() as tmpdir:
        data = [
            {'name': 'Health', 'member_count': 6},
            {'name': 'Finance', 'member_count': 7}
        ]
        path = Path(tmpdir) / 'results.csv'
        assert convert_to_csv(data, path) == 2
        df = pd.read_csv(path)
        assert list(df.columns) == ['name', 'member_count']

        # Specified columns are added when missing
        columns = ['name', 'member_count', 'error']
        col_path = Path(tmpdir) / 'columns.csv'
        assert convert_to_csv(data, col_path, columns=columns) == 2
        df = pd.read_csv(col_path)
        assert list(df.columns) == columns
        assert pd.isna(df['error']).all()

        # Empty data still writes headers
        empty_path = Path(tmpdir) / 'empty.csv'
        assert convert_to_csv([], empty_path, columns=columns) == 0
        assert empty_path.read_text(encoding='utf-8').strip() == 'name,member_count,error'


def test_setup_project_paths():
    with tempfile.TemporaryDirectory() as tmpdir:
        paths = setup_project_paths(tmpdir)
        assert paths['base'] == Path(tmpdir).resolve()
        assert paths['log'].is_dir()
        assert paths['reports'].is_dir()
        assert paths['log'].parent == paths['base']


def test_setup_logging_replaces_handlers():
    with tempfile.TemporaryDirectory() as tmpdir:
        logger = setup_logging('sync.log', Path(tmpdir), logger_name='senate_sync_test')
        logger = setup_logging('sync.log', Path(tmpdir), logger_name='senate_sync_test')
        try:
            assert len(logger.handlers) == 2
            assert logger.propagate is False
            logger.info('hello')
            for handler in logger.handlers:
                handler.flush()
            assert 'hello' in (Path(tmpdir) / 'sync.log').read_text(encoding='utf-8')
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()
