"""Solver Configuration - parameter bundles and named presets.

SolverSettings is a validated bundle of parameter values that can be built
from a dict or a JSON file and applied to a Model in one call. Keys may be
enumerators, integer ids or case-insensitive names such as ``"iterlimit"``.
Integer values of choice-valued parameters may be given by name too (``{"simplifier": "off"}``).

SolverConfig holds the presets most callers need.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CAREFUL_TOLERANCE, FAST_TIME_LIMIT_SECONDS
from ..models.params import (
    BoolParam,
    IntParam,
    ParamKind,
    RealParam,
    Scaler,
    Simplifier,
    resolve_param_name,
)

logger = logging.getLogger(__name__)


def _resolve_keys(kind: ParamKind, values: Any) -> Any:
    if not isinstance(values, dict):
        return values
    return {resolve_param_name(kind, key): value for key, value in values.items()}


class SolverSettings(BaseModel):
    """Parameter values to forward to a Model."""
    bool_params: Dict[BoolParam, bool] = Field(default_factory=dict)
    int_params: Dict[IntParam, int] = Field(default_factory=dict)
    real_params: Dict[RealParam, float] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @field_validator('bool_params', mode='before')
    @classmethod
    def resolve_bool_names(cls, v):
        return _resolve_keys(ParamKind.BOOL, v)

    @field_validator('int_params', mode='before')
    @classmethod
    def resolve_int_names(cls, v):
        """Resolve keys, and value names of choice-valued parameters."""
        v = _resolve_keys(ParamKind.INT, v)
        if not isinstance(v, dict):
            return v
        resolved = {}
        for param, value in v.items():
            value_type = param.value_type
            if isinstance(value, str) and value_type is not None:
                key = value.strip().upper().replace("-", "_").replace(" ", "_")
                try:
                    value = value_type[key]
                except KeyError:
                    raise ValueError(
                        f"Unknown value {value!r} for {param.name} "
                        f"(expected one of {', '.join(value_type.__members__)})"
                    ) from None
            resolved[param] = value
        return resolved

    @field_validator('real_params', mode='before')
    @classmethod
    def resolve_real_names(cls, v):
        return _resolve_keys(ParamKind.REAL, v)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SolverSettings":
        """Load settings from a JSON file.

        Raises:
            FileNotFoundError: If ``path`` does not exist
            pydantic.ValidationError: If a key or value does not resolve
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        settings = cls.model_validate(data)
        logger.info(f"Loaded {len(settings)} solver parameters from {path}")
        return settings

    def __len__(self) -> int:
        return len(self.bool_params) + len(self.int_params) + len(self.real_params)

    def apply(self, model) -> None:
        """Forward every value to ``model`` (bool, then int, then real)."""
        for param, value in self.bool_params.items():
            model.set_bool_param(param, value)
        for param, value in self.int_params.items():
            model.set_int_param(param, value)
        for param, value in self.real_params.items():
            model.set_real_param(param, value)
        logger.debug(f"Applied {len(self)} solver parameters")


class SolverConfig:
    """Named parameter presets."""

    DEFAULT = SolverSettings()

    FAST = SolverSettings(
        int_params={
            IntParam.SIMPLIFIER: Simplifier.AUTO,
            IntParam.SCALER: Scaler.BIEQUI,
        },
        real_params={
            RealParam.TIMELIMIT: FAST_TIME_LIMIT_SECONDS,
        },
    )

    CAREFUL = SolverSettings(
        int_params={
            IntParam.SIMPLIFIER: Simplifier.OFF,
        },
        real_params={
            RealParam.FEASTOL: CAREFUL_TOLERANCE,
            RealParam.OPTTOL: CAREFUL_TOLERANCE,
        },
    )

    PRESETS = {
        'default': DEFAULT,
        'fast': FAST,
        'careful': CAREFUL,
    }

    @staticmethod
    def configure(model, mode='default'):
        """Apply a named preset to ``model`` and return it.

        Raises:
            ValueError: If ``mode`` is not a known preset
        """
        try:
            settings = SolverConfig.PRESETS[mode]
        except KeyError:
            raise ValueError(
                f"Unknown solver preset {mode!r} (expected one of {', '.join(SolverConfig.PRESETS)})"
            ) from None
        model.apply_settings(settings)
        return model
