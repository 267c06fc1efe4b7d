"""
Core layer: vectors, point sets, box regions and the grid cursor.

Everything here is independent of any concrete objective function;
the search layer (src.search) builds on top of it.
"""
