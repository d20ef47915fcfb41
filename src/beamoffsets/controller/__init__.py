"""
Offset Correction Engine
========================
Transform, grouping, bulk update and analysis of beam offsets.

Note: This package should only talk to the host through `ElementHost`.
"""
