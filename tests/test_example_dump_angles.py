# -*- coding: utf-8 -*-
"""
Tests for the dump_angles example script.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import importlib.util
from pathlib import Path

# Third-party
import pytest

_SCRIPT = (Path(__file__).parent.parent / 's2angles' / 'example'
           / 'dump_angles.py')


@pytest.fixture(scope='module')
def dump_module():
    """Load the example script as a module."""
    spec = importlib.util.spec_from_file_location('dump_angles', _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _granule_xml(rows: int = 23) -> str:
    row = ' '.join(['7.5'] * 23)
    values = ''.join(f'<VALUES>{row}</VALUES>' for _ in range(rows))
    return (
        '<?xml version="1.0"?>\n<Tile>'
        '<Viewing_Incidence_Angles_Grids bandId="1" detectorId="6">'
        f'<Zenith><Values_List>{values}</Values_List></Zenith>'
        f'<Azimuth><Values_List>{values}</Values_List></Azimuth>'
        '</Viewing_Incidence_Angles_Grids>'
        '<Mean_Viewing_Incidence_Angle bandId="1">'
        '<ZENITH_ANGLE>4.5</ZENITH_ANGLE><AZIMUTH_ANGLE>99.0</AZIMUTH_ANGLE>'
        '</Mean_Viewing_Incidence_Angle></Tile>'
    )


def test_parse_args(dump_module):
    args = dump_module.parse_args(['MTD_TL.xml', '--strict', '--plot', '3'])
    assert args.filepath == Path('MTD_TL.xml')
    assert args.strict is True
    assert args.plot == 3


def test_summary(dump_module, tmp_path, capsys):
    """Coverage, completeness and mean angles are printed per band."""
    path = tmp_path / 'MTD_TL.xml'
    path.write_text(_granule_xml())

    assert dump_module.dump_angles(path) == 0
    out = capsys.readouterr().out
    assert 'Zenith grids:   1' in out
    assert 'band  1  detectors=[6]  complete' in out
    assert 'zen=4.5 az=99.0' in out
    assert 'band  9  detectors=[]  missing' in out


def test_diagnostics_listed(dump_module, tmp_path, capsys):
    path = tmp_path / 'MTD_TL.xml'
    path.write_text(_granule_xml(rows=22))

    assert dump_module.dump_angles(path) == 0
    out = capsys.readouterr().out
    assert 'incomplete' in out
    assert 'IncompleteGrid' in out


def test_failure_exit_code(dump_module, tmp_path, capsys):
    path = tmp_path / 'MTD_TL.xml'
    path.write_text('<Tile>')
    assert dump_module.dump_angles(path) == 1
    assert 'Failed' in capsys.readouterr().out


def test_axes_with_different_first_detector(dump_module, tmp_path, capsys):
    """Each axis is judged by its own first-registered detector."""
    row = ' '.join(['1.0'] * 23)
    values = ''.join(f'<VALUES>{row}</VALUES>' for _ in range(23))
    path = tmp_path / 'MTD_TL.xml'
    path.write_text(
        '<Tile>'
        '<Viewing_Incidence_Angles_Grids bandId="1" detectorId="6">'
        f'<Zenith><Values_List>{values}</Values_List></Zenith>'
        '</Viewing_Incidence_Angles_Grids>'
        '<Viewing_Incidence_Angles_Grids bandId="1" detectorId="7">'
        f'<Azimuth><Values_List>{values}</Values_List></Azimuth>'
        '</Viewing_Incidence_Angles_Grids>'
        '</Tile>'
    )

    assert dump_module.dump_angles(path) == 0
    assert 'band  1  detectors=[6]  complete' in capsys.readouterr().out
