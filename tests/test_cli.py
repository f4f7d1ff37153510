import pytest
import typer

from dice_analyzer.cli.main import _parse_pairs


def test_parse_pairs_accepts_mixed_separators():
    assert _parse_pairs("12 40, 33/20; 7-50") == [[12, 40], [33, 20], [7, 50]]

def test_parse_pairs_rejects_odd_chunk():
    with pytest.raises(typer.BadParameter):
        _parse_pairs("12 40 7")
