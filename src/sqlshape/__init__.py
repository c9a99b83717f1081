"""sqlshape: classify SQL statements by result set and SELECT routing."""

from sqlshape.policy import Classification, classify_sql, has_result_set, is_select, run_policy

__all__ = ["Classification", "classify_sql", "has_result_set", "is_select", "run_policy"]
