"""Tests against the HiGHS engine.

The round-trip instance (see conftest.round_trip_model) is

    max x + y  s.t.  1 <= x + y <= 5,  0 <= x <= 5,  0 <= y <= 10
"""

import logging

import pytest
from pyomo.opt import TerminationCondition

from safelp import (
    BasisStatus,
    BoolParam,
    EngineError,
    IntParam,
    Model,
    ObjSense,
    RealParam,
    Simplifier,
    Status,
    Timer,
)


class TestRoundTrip:
    """Tests for solve, mutate and re-solve on one HiGHS context."""

    def test_initial_solve(self, round_trip_model):
        """Test the round-trip instance solves to 5.0 with dual 1.0."""
        with round_trip_model.optimize() as solved:
            assert solved.status() is Status.OPTIMAL
            assert solved.obj_val() == pytest.approx(5.0)
            assert sum(solved.primal_solution()) == pytest.approx(5.0)
            assert solved.dual_solution() == pytest.approx([1.0])
            assert len(solved.reduced_costs()) == 2
            assert solved.termination_condition() == TerminationCondition.optimal

    def test_mutation_after_solve(self):
        """Test removing the row, then a column, between solves."""
        model = Model()
        x = model.add_col(objective=1.0, lower_bound=0.0, upper_bound=5.0)
        model.add_col(objective=1.0, lower_bound=0.0, upper_bound=10.0)
        row = model.add_row([1.0, 1.0], lhs=1.0, rhs=5.0)

        solved = model.optimize()
        assert solved.obj_val() == pytest.approx(5.0)

        model = solved.into_model()
        model.remove_row(row)
        solved = model.optimize()
        assert solved.status() is Status.OPTIMAL
        assert solved.obj_val() == pytest.approx(15.0)
        assert solved.primal_solution() == pytest.approx([5.0, 10.0])
        assert solved.dual_solution() == []

        model = solved.into_model()
        model.remove_col(x)
        solved = model.optimize()
        assert solved.status() is Status.OPTIMAL
        assert solved.obj_val() == pytest.approx(10.0)
        assert solved.num_cols() == 1
        assert solved.solving_time() >= 0.0
        solved.close()

    def test_change_bounds_and_objective(self):
        """Test in-place changes are picked up by the next solve."""
        model = Model()
        x = model.add_col(objective=1.0, upper_bound=5.0)
        y = model.add_col(objective=1.0, upper_bound=10.0)

        model.change_col_bounds(x, 0.0, 1.0)
        model.change_col_objective(y, 2.0)
        with model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(21.0)

    def test_change_row_range(self, round_trip_model):
        """Test a tighter row range lowers the maximum."""
        round_trip_model.change_row_range(round_trip_model.row_id(0), 1.0, 3.0)
        with round_trip_model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(3.0)

    def test_minimize(self, round_trip_model):
        """Test switching the objective sense."""
        round_trip_model.set_obj_sense(ObjSense.MINIMIZE)
        with round_trip_model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(1.0)
            assert solved.int_param(IntParam.OBJSENSE) is ObjSense.MINIMIZE

    def test_objective_offset(self, round_trip_model):
        """Test the objective offset is added to the objective value."""
        round_trip_model.set_real_param(RealParam.OBJ_OFFSET, 2.0)
        with round_trip_model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(7.0)

    def test_empty_model_is_optimal(self, highs_model):
        """Test an empty instance solves to optimality."""
        with highs_model.optimize() as solved:
            assert solved.status() is Status.OPTIMAL
            assert solved.primal_solution() == []


class TestOutcomes:
    """Tests for non-optimal outcomes reported as statuses."""

    def test_iteration_limit_abort(self, round_trip_model):
        """Test an iteration limit of zero aborts before the first pivot."""
        round_trip_model.set_simplifier(Simplifier.OFF)
        round_trip_model.set_int_param(IntParam.ITERLIMIT, 0)
        with round_trip_model.optimize() as solved:
            assert solved.status() is Status.ABORT_ITER
            assert solved.num_iterations() == 0
            assert solved.termination_condition() == TerminationCondition.maxIterations

    def test_infeasible(self):
        """Test a row that cannot be satisfied reports INFEASIBLE."""
        model = Model()
        model.set_simplifier(Simplifier.OFF)
        model.add_col(objective=1.0, lower_bound=1.0, upper_bound=5.0)
        model.add_col(objective=1.0, lower_bound=1.0, upper_bound=10.0)
        model.add_row([1.0, 1.0], lhs=0.0, rhs=0.0)
        with model.optimize() as solved:
            assert solved.status() is Status.INFEASIBLE
            assert solved.termination_condition() == TerminationCondition.infeasible

    def test_inverted_column_bounds_infeasible(self, highs_model):
        """Test a column with lower bound above its upper bound reports INFEASIBLE."""
        highs_model.add_col(objective=1.0, lower_bound=5.0, upper_bound=1.0)
        assert highs_model.num_cols() == 1
        with highs_model.optimize() as solved:
            assert solved.status() is Status.INFEASIBLE
            assert solved.num_cols() == 1


class TestBasis:
    """Tests for basis status queries."""

    def test_one_basic_per_row(self, round_trip_model):
        """Test an optimal basis has exactly as many basics as rows."""
        cols = [round_trip_model.col_id(0), round_trip_model.col_id(1)]
        row = round_trip_model.row_id(0)
        with round_trip_model.optimize() as solved:
            statuses = [solved.col_basis_status(c) for c in cols]
            statuses.append(solved.row_basis_status(row))
            assert sum(s.is_basic() for s in statuses) == 1
            assert all(s.is_basic() or s.is_at_bound() for s in statuses)

    def test_fixed_column(self):
        """Test a nonbasic column with equal bounds reports FIXED."""
        model = Model()
        col = model.add_col(objective=1.0, lower_bound=2.0, upper_bound=2.0)
        with model.optimize() as solved:
            assert solved.obj_val() == pytest.approx(2.0)
            assert solved.col_basis_status(col) is BasisStatus.FIXED

    def test_frames(self, round_trip_model):
        """Test result frames are sized to the model."""
        with round_trip_model.optimize() as solved:
            assert len(solved.column_frame()) == 2
            assert len(solved.row_frame()) == 1
            assert solved.row_frame()["dual"].iloc[0] == pytest.approx(1.0)

    def test_bulk_statuses_match_single_queries(self, round_trip_model):
        """Test bulk basis queries agree with the per-position ones."""
        with round_trip_model.optimize() as solved:
            engine = solved._engine
            n, m = engine.num_cols(), engine.num_rows()
            assert engine.basis_col_statuses(n) == [engine.basis_col_status(i) for i in range(n)]
            assert engine.basis_row_statuses(m) == [engine.basis_row_status(i) for i in range(m)]
            frame = solved.column_frame()
            assert list(frame["basis_status"]) == [
                BasisStatus.from_col_code(engine.basis_col_status(i)).name for i in range(n)
            ]


class TestParameters:
    """Tests for parameter forwarding to HiGHS."""

    def test_defaults(self, highs_model):
        """Test a new context maximizes and has no iteration limit."""
        assert highs_model.int_param(IntParam.OBJSENSE) is ObjSense.MAXIMIZE
        assert highs_model.int_param(IntParam.ITERLIMIT) == -1
        assert highs_model.int_param(IntParam.TIMER) is Timer.CPU

    def test_values_round_trip(self, highs_model):
        """Test every kind of parameter reads back what was set."""
        highs_model.set_real_param(RealParam.TIMELIMIT, 100.0)
        highs_model.set_int_param(IntParam.ITERLIMIT, 50)
        highs_model.set_bool_param(BoolParam.RATREC, True)
        highs_model.set_simplifier(Simplifier.OFF)

        assert highs_model.real_param(RealParam.TIMELIMIT) == pytest.approx(100.0)
        assert highs_model.int_param(IntParam.ITERLIMIT) == 50
        assert highs_model.bool_param(BoolParam.RATREC) is True
        assert highs_model.int_param(IntParam.SIMPLIFIER) is Simplifier.OFF

    def test_unforwarded_params_are_recorded(self, highs_model):
        """Test parameters without a HiGHS option still read back."""
        highs_model.set_real_param(RealParam.LIFTMAXVAL, 1000.0)
        assert highs_model.real_param(RealParam.LIFTMAXVAL) == pytest.approx(1000.0)

    def test_rejected_option_is_logged(self, highs_model, caplog):
        """Test HiGHS rejecting a value is logged, not raised."""
        with caplog.at_level(logging.WARNING, logger="safelp.engine.highs_engine"):
            highs_model.set_real_param(RealParam.FEASTOL, -1.0)
        assert "rejected" in caplog.text
        assert highs_model.real_param(RealParam.FEASTOL) == -1.0

    def test_timer_off_reports_zero(self, round_trip_model):
        """Test TIMER OFF reports zero solving time."""
        round_trip_model.set_timer(Timer.OFF)
        with round_trip_model.optimize() as solved:
            assert solved.solving_time() == 0.0

    def test_wallclock_timer(self, round_trip_model):
        """Test TIMER WALLCLOCK reports a non-negative time."""
        round_trip_model.set_timer(Timer.WALLCLOCK)
        with round_trip_model.optimize() as solved:
            assert solved.solving_time() >= 0.0


class TestStructuralErrors:
    """Tests for structural calls HiGHS refuses."""

    def test_coefficients_for_missing_row(self, highs_model):
        """Test a coefficient for a row that does not exist raises EngineError."""
        with pytest.raises(EngineError):
            highs_model.add_col({3: 1.0})
        assert highs_model.num_cols() == 0
