"""Tests for loading instances from LP and MPS files."""

import pytest

from safelp import (
    EngineError,
    IntParam,
    Model,
    ModelConsumedError,
    ModelFileNotFoundError,
    ObjSense,
    StaleIdentifierError,
    Status,
    UnsupportedFormatError,
)
from tests.fixtures.engine_mocks import create_counting_engine_factory


LP_TEXT = """\
Minimize
 obj: - x - 2 y
Subject To
 lim1: x + y <= 4
 lim2: x + 3 y <= 6
Bounds
 0 <= x <= 3
End
"""


class TestPathValidation:
    """Tests for checks made before the engine sees the path."""

    def test_missing_file(self, counting_model, tmp_path):
        """Test a missing file raises ModelFileNotFoundError."""
        with pytest.raises(ModelFileNotFoundError):
            counting_model.read_file(tmp_path / "missing.mps")

    def test_missing_file_is_file_not_found(self, counting_model, tmp_path):
        """Test the error is also a FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            counting_model.read_file(tmp_path / "missing.lp")

    def test_wrong_suffix(self, counting_model, counting_factory, tmp_path):
        """Test an unsupported suffix is rejected without calling the engine."""
        factory, _ = counting_factory
        path = tmp_path / "model.txt"
        path.write_text(LP_TEXT)

        with pytest.raises(UnsupportedFormatError):
            counting_model.read_file(path)
        assert factory.engines[0].calls == []

    def test_missing_check_comes_first(self, counting_model, tmp_path):
        """Test a missing file with a bad suffix reports the missing file."""
        with pytest.raises(ModelFileNotFoundError):
            counting_model.read_file(tmp_path / "missing.txt")

    def test_engine_parse_failure(self, counting_model, counting_factory, tmp_path):
        """Test the engine failing to parse raises EngineError."""
        factory, _ = counting_factory
        factory.engines[0].readable = False
        path = tmp_path / "broken.lp"
        path.write_text("not an lp file")

        with pytest.raises(EngineError):
            counting_model.read_file(path)


class TestIdentifiersAfterLoad:
    """Tests for identifier validity across a file load."""

    def test_outstanding_ids_become_stale(self, counting_model, tmp_path):
        """Test ids issued before the load are rejected after it."""
        col = counting_model.add_col()
        row = counting_model.add_row()
        path = tmp_path / "model.mps"
        path.write_text("NAME X\nENDATA\n")

        counting_model.read_file(path)

        assert counting_model.num_cols() == 3
        assert counting_model.num_rows() == 2
        with pytest.raises(StaleIdentifierError):
            counting_model.change_col_objective(col, 1.0)
        with pytest.raises(StaleIdentifierError):
            counting_model.change_row_range(row, 0.0, 1.0)
        counting_model.change_col_objective(counting_model.col_id(2), 1.0)

    def test_consumed_model_cannot_load(self, tmp_path):
        """Test read_file on a consumed model raises before touching the path."""
        factory, _ = create_counting_engine_factory()
        model = Model(engine_factory=factory)
        solved = model.optimize()
        with pytest.raises(ModelConsumedError):
            model.read_file(tmp_path / "missing.mps")
        solved.close()


class TestHighsFiles:
    """Tests reading real files with HiGHS."""

    def test_mps_file(self, highs_model, data_dir):
        """Test the bundled MPS instance solves to -5.0 as a minimization."""
        highs_model.read_file(data_dir / "simple.mps")
        assert highs_model.num_cols() == 2
        assert highs_model.num_rows() == 2
        assert highs_model.int_param(IntParam.OBJSENSE) is ObjSense.MINIMIZE

        with highs_model.optimize() as solved:
            assert solved.status() is Status.OPTIMAL
            assert solved.obj_val() == pytest.approx(-5.0)
            assert solved.primal_solution() == pytest.approx([3.0, 1.0])

    def test_lp_file(self, highs_model, tmp_path):
        """Test an LP-format file solves to the same optimum."""
        path = tmp_path / "simple.lp"
        path.write_text(LP_TEXT)
        highs_model.read_file(str(path))

        with highs_model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(-5.0)

    def test_loaded_model_can_be_edited(self, highs_model, data_dir):
        """Test columns of a loaded instance are addressable by position."""
        highs_model.read_file(data_dir / "simple.mps")
        highs_model.change_col_bounds(highs_model.col_id(0), 0.0, 0.0)

        with highs_model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(-4.0)
