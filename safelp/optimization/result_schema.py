"""Pydantic schema for a solve result snapshot.

SolveSummary is what ``SolvedModel.summary()`` returns: a plain, validated
copy of the result queries that outlives the engine context. Extra fields are
allowed so callers can attach their own metadata.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import SOLUTION_TOLERANCE


class SolveSummary(BaseModel):
    """Snapshot of one solve.

    Solution vectors may be empty when the caller skipped them; otherwise
    their lengths must match the column/row counts.
    """
    status: str = Field(..., description="Status name (e.g. 'OPTIMAL')")
    status_code: int = Field(..., description="Engine status code")
    termination_condition: str = Field(..., description="Pyomo termination condition")
    objective_value: float = Field(..., description="Objective value reported by the engine")
    num_iterations: int = Field(..., ge=0, description="Simplex iterations")
    solving_time: float = Field(..., ge=0, description="Seconds spent in the engine")
    num_cols: int = Field(..., ge=0)
    num_rows: int = Field(..., ge=0)
    primal_solution: List[float] = Field(default_factory=list)
    dual_solution: List[float] = Field(default_factory=list)
    reduced_costs: List[float] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @model_validator(mode='after')
    def validate_vector_lengths(self):
        """Vectors are either omitted or sized to the model."""
        for name, expected in (
            ("primal_solution", self.num_cols),
            ("reduced_costs", self.num_cols),
            ("dual_solution", self.num_rows),
        ):
            actual = len(getattr(self, name))
            if actual and actual != expected:
                raise ValueError(f"{name} has {actual} entries, expected {expected}")
        return self

    def is_optimal(self) -> bool:
        return self.status == "OPTIMAL"

    def nonzero_primal(self, tolerance: float = SOLUTION_TOLERANCE) -> Dict[int, float]:
        """Column index -> value for columns whose value exceeds ``tolerance``."""
        return {i: v for i, v in enumerate(self.primal_solution) if abs(v) > tolerance}

    def __str__(self) -> str:
        return (
            f"{self.status} (objective={self.objective_value}, iterations={self.num_iterations}, "
            f"time={self.solving_time:.3f}s, {self.num_cols} cols x {self.num_rows} rows)"
        )
