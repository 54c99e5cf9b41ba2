import pytest

from src.absensi.absensi.common.validators import require_coordinate, require_min_length, require_non_empty
from src.absensi.absensi.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  Budi ", "Nama") == "Budi"


def test_require_non_empty_message():
    with pytest.raises(ValidationError, match="Nama wajib diisi"):
        require_non_empty("   ", "Nama")


def test_require_min_length():
    with pytest.raises(ValidationError):
        require_min_length("abc", "Password", 6)


@pytest.mark.parametrize("lat, lng", [(None, 106.8), ("x", 1), (91, 0), (0, -181), (float("nan"), 0)])
def test_require_coordinate_rejects(lat, lng):
    with pytest.raises(ValidationError):
        require_coordinate(lat, lng)


def test_require_coordinate_accepts_strings():
    assert require_coordinate("-6.2", "106.8") == (-6.2, 106.8)
