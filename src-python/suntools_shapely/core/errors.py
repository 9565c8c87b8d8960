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

Error taxonomy and the result envelope returned by batch entry points.

The core raises; the batch façades in ``suntools_shapely.analysis`` catch
and convert into :class:`Outcome` objects so the caller decides whether a
failure aborts the batch or only blanks the offending cells.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class SuntoolsError(Exception):
    """Base class for all errors raised by suntools_shapely."""


class InvalidInputGeometry(SuntoolsError, ValueError):
    """
    Input geometry cannot be analysed.

    Raised for panels with more than one naked-edge loop, empty meshes,
    empty required inputs and curves that are not coplanar with the
    analysis plane.
    """


class DegenerateProjection(SuntoolsError, ValueError):
    """The projection direction lies in (or too close to) the target plane."""


class ReconciliationFailure(SuntoolsError):
    """
    Split piece count could not be matched to the source's island count.

    The splitter only flags the result; the shade assessment raises this
    when AnalysisSettings.strict_reconciliation is set.
    """


class ErrorKind(Enum):
    INVALID_INPUT_GEOMETRY = 'InvalidInputGeometry'
    DEGENERATE_PROJECTION = 'DegenerateProjection'
    RECONCILIATION_FAILURE = 'ReconciliationFailure'

    @classmethod
    def from_exception(cls, exc: BaseException) -> 'ErrorKind':
        if isinstance(exc, DegenerateProjection):
            return cls.DEGENERATE_PROJECTION
        if isinstance(exc, ReconciliationFailure):
            return cls.RECONCILIATION_FAILURE
        return cls.INVALID_INPUT_GEOMETRY


@dataclass(frozen=True)
class Outcome:
    """
    Success-or-error envelope.

    Attributes:
        status: 'ok' or 'error'
        value: The payload on success (may also carry a partial payload
            when the caller chose to skip failures)
        error_kind: The ErrorKind on failure
        message: Human-readable error description
    """
    status: str
    value: Any = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: Any) -> 'Outcome':
        return cls(status='ok', value=value)

    @classmethod
    def error(cls, exc: BaseException, value: Any = None) -> 'Outcome':
        return cls(
            status='error',
            value=value,
            error_kind=ErrorKind.from_exception(exc),
            message=str(exc),
        )

    @property
    def is_ok(self) -> bool:
        return self.status == 'ok'

    def unwrap(self) -> Any:
        """Return the payload, raising the recorded error kind on failure."""
        if self.is_ok:
            return self.value
        if self.error_kind is ErrorKind.DEGENERATE_PROJECTION:
            raise DegenerateProjection(self.message)
        if self.error_kind is ErrorKind.RECONCILIATION_FAILURE:
            raise ReconciliationFailure(self.message)
        raise InvalidInputGeometry(self.message)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_ok:
            return {'status': 'ok'}
        return {
            'status': 'error',
            'error_kind': self.error_kind.value if self.error_kind else None,
            'message': self.message,
        }
