"""
Lane Store Tables

Fully-qualified names of the tables the lane maintenance loader writes.
Read queries live in data/loaders/sql/.
"""

SCHEMA = "rating"

STD_LANES = f"{SCHEMA}.std_lanes"
LTL_LANES = f"{SCHEMA}.ltl_lanes"
