"""
Parsers sub-package for dsv-matrix.

Design: Strategy Pattern
- base.py defines the BaseParser ABC (discover + populate).
- normal.py implements NonTransposeParser (lines are rows).
- transposed.py implements TransposeParser (lines are columns).

The two parsers differ only in which axis is counted line by line and
which is measured from the first record. The loader (loader.py) picks
one from the caller's transpose flag.
"""
