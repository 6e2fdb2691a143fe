import numpy as np
import pytest

from splitarchitect.elements import Characters
from splitarchitect.exceptions import (
    CharactersError,
    SplitArchitectError,
    SplitValidationError,
)


@pytest.fixture
def characters():
    return Characters.from_sequences(["ACGT", "ACGA", "TCGA"], labels=["a", "b", "c"])


def test_dimensions(characters):
    assert characters.ntax == 3
    assert characters.nchar == 4
    assert characters.nloci == 4


def test_one_based_access(characters):
    assert characters.get(1, 1) == "A"
    assert characters.get(3, 1) == "T"
    assert characters.get(2, 4) == "A"
    assert list(characters.column(1)) == ["A", "A", "T"]
    assert characters.sequence(3) == "TCGA"


def test_set_and_copy(characters):
    copy = characters.copy()
    copy.set(1, 1, "G")
    assert copy.get(1, 1) == "G"
    assert characters.get(1, 1) == "A"
    assert copy != characters


def test_select_columns(characters):
    selected = characters.select_columns(np.array([3, 3, 0]))
    assert selected.sequence(1) == "TTA"
    assert selected.labels == ["a", "b", "c"]


def test_diploid_loci():
    data = Characters.from_sequences(["AACC", "AGCT"], diploid=True)
    assert data.nloci == 2


def test_ragged_sequences_raise():
    with pytest.raises(CharactersError):
        Characters.from_sequences(["ACG", "AC"])


def test_label_count_mismatch_raises():
    with pytest.raises(CharactersError):
        Characters.from_sequences(["AC", "AG"], labels=["a"])


def test_empty_matrix_raises_characters_error():
    with pytest.raises(CharactersError) as excinfo:
        Characters([])
    assert not isinstance(excinfo.value, SplitValidationError)
    assert isinstance(excinfo.value, SplitArchitectError)
