"""
Copyright 2026 suntools-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Any, Dict

from . import constants


class AnalysisSettings:
    """
    Configuration surface for every tolerance used by the analysis.

    Each component works at its own tolerance (0.001 for curves, 0.0001
    for mesh splitting, 0.01 for hull closure). They are named here and
    passed explicitly into every core call by the analysis façades.

    Attributes:
        curve_tolerance (float): Coplanarity / relationship / boolean
            tolerance for curve regions.
        mesh_split_tolerance (float): Tolerance used by the mesh splitter
            (fragment filtering, final containment test).
        hull_closure_tolerance (float): Largest first-to-last gap accepted
            before a convex hull chain is closed explicitly.
        projection_epsilon (float): Relative threshold on
            |normal . direction| below which a projection is degenerate.
        cutter_depth (float): Thickness of the cutter band extruded from a
            panel outline along its normal.
        failure_policy (str): 'abort' to return an error and empty trees on
            invalid source geometry, 'skip' to blank only the offending
            source's cells.
        strict_reconciliation (bool): Raise ReconciliationFailure for a
            shade cell whose split pieces could not be reconciled, instead
            of returning the best-effort area with a flagged comment.
    """

    VALID_FAILURE_POLICIES = (constants.FAILURE_POLICY_ABORT, constants.FAILURE_POLICY_SKIP)

    _POSITIVE_FIELDS = (
        'curve_tolerance',
        'mesh_split_tolerance',
        'hull_closure_tolerance',
        'projection_epsilon',
        'cutter_depth',
    )

    def __init__(self, **overrides):
        self._curve_tolerance = constants.CURVE_TOLERANCE
        self._mesh_split_tolerance = constants.MESH_SPLIT_TOLERANCE
        self._hull_closure_tolerance = constants.HULL_CLOSURE_TOLERANCE
        self._projection_epsilon = constants.PROJECTION_EPSILON
        self._cutter_depth = constants.CUTTER_DEPTH
        self._failure_policy = constants.FAILURE_POLICY_ABORT
        self._strict_reconciliation = False
        for key, value in overrides.items():
            if key not in self._POSITIVE_FIELDS and key not in ('failure_policy', 'strict_reconciliation'):
                raise ValueError(f"Unknown setting '{key}'")
            setattr(self, key, value)

    @staticmethod
    def _check_positive(name, value):
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"{name} must be a positive number, got {value!r}")
        return float(value)

    @property
    def curve_tolerance(self):
        return self._curve_tolerance

    @curve_tolerance.setter
    def curve_tolerance(self, value):
        self._curve_tolerance = self._check_positive('curve_tolerance', value)

    @property
    def mesh_split_tolerance(self):
        return self._mesh_split_tolerance

    @mesh_split_tolerance.setter
    def mesh_split_tolerance(self, value):
        self._mesh_split_tolerance = self._check_positive('mesh_split_tolerance', value)

    @property
    def hull_closure_tolerance(self):
        return self._hull_closure_tolerance

    @hull_closure_tolerance.setter
    def hull_closure_tolerance(self, value):
        self._hull_closure_tolerance = self._check_positive('hull_closure_tolerance', value)

    @property
    def projection_epsilon(self):
        return self._projection_epsilon

    @projection_epsilon.setter
    def projection_epsilon(self, value):
        self._projection_epsilon = self._check_positive('projection_epsilon', value)

    @property
    def cutter_depth(self):
        return self._cutter_depth

    @cutter_depth.setter
    def cutter_depth(self, value):
        self._cutter_depth = self._check_positive('cutter_depth', value)

    @property
    def failure_policy(self):
        """Get the batch failure policy ('abort' or 'skip')."""
        return self._failure_policy

    @failure_policy.setter
    def failure_policy(self, value):
        if value not in self.VALID_FAILURE_POLICIES:
            raise ValueError(
                f"Invalid failure_policy '{value}'. "
                f"Valid options: {self.VALID_FAILURE_POLICIES}"
            )
        self._failure_policy = value

    @property
    def strict_reconciliation(self):
        return self._strict_reconciliation

    @strict_reconciliation.setter
    def strict_reconciliation(self, value):
        if not isinstance(value, bool):
            raise ValueError(f"strict_reconciliation must be True or False, got {value!r}")
        self._strict_reconciliation = value

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self._POSITIVE_FIELDS}
        data['failure_policy'] = self.failure_policy
        data['strict_reconciliation'] = self.strict_reconciliation
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisSettings':
        return cls(**data)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"AnalysisSettings({fields})"
