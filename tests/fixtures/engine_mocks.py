"""Reusable engine doubles for model lifecycle tests.

CountingEngine is an in-memory SolverEngine that keeps just enough state to
answer structural queries (counts, bounds, parameters) and returns scripted
status codes from optimize(). A shared AllocationCounter records every
create() and free(), so tests can assert that one logical model owns exactly
one engine context and releases it exactly once.
"""

from unittest.mock import Mock

from safelp.engine.base import SolverEngine
from safelp.errors import EngineError


class AllocationCounter:
    """Counts engine contexts created and freed through one factory."""

    def __init__(self):
        self.created = 0
        self.freed = 0

    @property
    def live(self) -> int:
        return self.created - self.freed


class CountingEngine(SolverEngine):
    """In-memory engine double.

    Args:
        counter: Shared allocation counter
        status_codes: Codes returned by successive optimize() calls; once
            exhausted, optimize() returns 1 (optimal)
        basis_code: Code returned by both basis queries
    """

    def __init__(self, counter=None, status_codes=(), basis_code=4):
        self.counter = counter or AllocationCounter()
        self.counter.created += 1
        self.status_codes = list(status_codes)
        self.basis_code = basis_code
        self.cols = []
        self.rows = []
        self.params = {}
        self.calls = []
        self.optimize_calls = 0
        self.basis_queries = {"single": 0, "bulk": 0}
        self.readable = True
        self.loaded_shape = (3, 2)
        self.is_freed = False

    @classmethod
    def create(cls):
        return cls()

    def free(self):
        if self.is_freed:
            raise AssertionError("engine context freed twice")
        self.is_freed = True
        self.counter.freed += 1

    # Structure

    def add_col_real(self, colentries, colsize, nnonzeros, objval, lb, ub):
        self.calls.append(("add_col_real", list(colentries), colsize, nnonzeros))
        if colsize > len(self.rows):
            raise EngineError("column has entries for rows that do not exist")
        self.cols.append({"obj": objval, "lb": lb, "ub": ub})

    def add_row_real(self, rowentries, rowsize, nnonzeros, lhs, rhs):
        self.calls.append(("add_row_real", list(rowentries), rowsize, nnonzeros))
        if rowsize > len(self.cols):
            raise EngineError("row has entries for columns that do not exist")
        self.rows.append({"lhs": lhs, "rhs": rhs})

    def remove_col_real(self, colidx):
        del self.cols[colidx]

    def remove_row_real(self, rowidx):
        del self.rows[rowidx]

    def change_var_bounds_real(self, colidx, lb, ub):
        self.cols[colidx].update(lb=lb, ub=ub)

    def change_row_range_real(self, rowidx, lhs, rhs):
        self.rows[rowidx].update(lhs=lhs, rhs=rhs)

    def change_obj_real(self, colidx, objval):
        self.cols[colidx]["obj"] = objval

    def num_cols(self):
        return len(self.cols)

    def num_rows(self):
        return len(self.rows)

    def read_instance_file(self, filename):
        self.calls.append(("read_instance_file", filename))
        if not self.readable:
            return False
        n_cols, n_rows = self.loaded_shape
        self.cols = [{"obj": 0.0, "lb": 0.0, "ub": float("inf")} for _ in range(n_cols)]
        self.rows = [{"lhs": 0.0, "rhs": 1.0} for _ in range(n_rows)]
        return True

    # Parameters

    def set_bool_param(self, paramcode, paramvalue):
        self.params[("bool", paramcode)] = paramvalue

    def set_int_param(self, paramcode, paramvalue):
        self.params[("int", paramcode)] = paramvalue

    def set_real_param(self, paramcode, paramvalue):
        self.params[("real", paramcode)] = paramvalue

    def get_bool_param(self, paramcode):
        return self.params.get(("bool", paramcode))

    def get_int_param(self, paramcode):
        return self.params.get(("int", paramcode))

    def get_real_param(self, paramcode):
        return self.params.get(("real", paramcode))

    # Results

    def optimize(self):
        self.optimize_calls += 1
        if self.status_codes:
            return self.status_codes.pop(0)
        return 1

    def obj_value_real(self):
        return sum(col["obj"] * col["lb"] for col in self.cols)

    def get_primal_real(self, dim):
        return [col["lb"] for col in self.cols][:dim]

    def get_dual_real(self, dim):
        return [0.0] * dim

    def get_redcost_real(self, dim):
        return [col["obj"] for col in self.cols][:dim]

    def num_iterations(self):
        return self.optimize_calls

    def solving_time(self):
        return 0.0

    def basis_col_status(self, colidx):
        self.basis_queries["single"] += 1
        return self.basis_code

    def basis_row_status(self, rowidx):
        self.basis_queries["single"] += 1
        return self.basis_code

    def basis_col_statuses(self, dim):
        self.basis_queries["bulk"] += 1
        return [self.basis_code] * dim

    def basis_row_statuses(self, dim):
        self.basis_queries["bulk"] += 1
        return [self.basis_code] * dim


def create_counting_engine_factory(status_codes=(), basis_code=4):
    """
    Create an engine factory that builds CountingEngines sharing one counter.

    Returns:
        Tuple of (factory, counter). ``factory.engines`` lists every engine
        the factory created, in order.
    """
    counter = AllocationCounter()
    engines = []

    def factory():
        engine = CountingEngine(counter, status_codes=status_codes, basis_code=basis_code)
        engines.append(engine)
        return engine

    factory.engines = engines
    return factory, counter


def create_failing_engine_factory(returns_none=True):
    """
    Create an engine factory that cannot allocate a context.

    Args:
        returns_none: Return None (True) or raise MemoryError (False)

    Returns:
        Mock factory; inspect ``call_count`` to check it was used
    """
    if returns_none:
        return Mock(return_value=None)
    return Mock(side_effect=MemoryError("out of engine memory"))
