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

"""
Constants used throughout the solar-access analysis.

Defaults only. Every core function takes its tolerance as an explicit
argument; these values are what AnalysisSettings hands out when the caller
does not override them.
"""

# Coplanar curve relationship / boolean tolerance (region utilities, glare)
CURVE_TOLERANCE = 1e-3

# Tolerance used while splitting projected meshes by the panel cutter
MESH_SPLIT_TOLERANCE = 1e-4

# Maximum gap between first and last hull point before the chain is closed
HULL_CLOSURE_TOLERANCE = 1e-2

# |D| below this (relative to |direction|) means the direction lies in the plane
PROJECTION_EPSILON = 1e-9

# Thickness of the cutter band extruded from a panel outline
CUTTER_DEPTH = 1.0

# Lengths below this are treated as zero (vector normalisation, plane fitting)
ZERO_LENGTH = 1e-12

# Batch failure policies
FAILURE_POLICY_ABORT = 'abort'
FAILURE_POLICY_SKIP = 'skip'

# =============================================================================
# Classification comments emitted alongside every result cell
# =============================================================================

DIFF_DISJOINT = "Disjoint, case 1"
DIFF_MUTUAL_TOUCH = "MutualIntersection, line/point intersection, case 2a_a"
DIFF_MUTUAL_DEGENERATE = "MutualIntersection, line/point intersection, case 2a_b"
DIFF_MUTUAL_SINGLE = "MutualIntersection, 1 resulting closed curve, case 2b"
DIFF_MUTUAL_MULTI = "MutualIntersection, {count} resulting closed curves, case 2c"
DIFF_A_INSIDE_B_CLOSED = "A Inside B, resulting curve is closed, case 3a"
DIFF_A_INSIDE_B_OPEN = "A Inside B, resulting curve is NOT closed, case 3b"
DIFF_B_INSIDE_A = "B Inside A, resulting curve is closed, case 4"

INTER_DISJOINT = "Disjoint"
INTER_MUTUAL_EMPTY = "MutualIntersection, line intersection"
INTER_MUTUAL_SINGLE = "MutualIntersection, 1 resulting closed curve"
INTER_MUTUAL_MULTI = "MutualIntersection, {count} resulting closed curves"
INTER_A_INSIDE_B_CLOSED = "A Inside B, resulting curve is closed"
INTER_A_INSIDE_B_OPEN = "A Inside B, resulting curve is NOT closed"
INTER_B_INSIDE_A = "B Inside A, resulting curve is closed"

SHADE_DISJOINT = "Disjoint, case 1"
SHADE_MUTUAL = "MutualIntersection, intersection of projected source and panel"
SHADE_A_INSIDE_B = "A Inside B, the panel is inside the convex hull of the projected shade module, case 3a"
SHADE_B_INSIDE_A = "B Inside A, the shade module projection is inside the panel, case 4"
SHADE_DISCARDED = "split result outside the panel footprint, discarded"
SHADE_UNRECONCILED = "disjoint piece count not reconciled"

DEGENERATE_PROJECTION = "Degenerate projection: {reason}"
INVALID_SOURCE = "Invalid source geometry: {reason}"
RECONCILIATION_FAILED = "Reconciliation failed: {reason}"
SOURCE_MISSING = "Source outline is null"
