"""
txscope.db

Database façade package.

Responsibilities:
- Pool wrapper, instrumented executor, result shaping, transaction orchestration and
  the root/transaction/task roles built on them.
"""

# Package marker; import from submodules directly.


# --- Module Notes -----------------------------------------------------------
# Nothing is imported here so `txscope.observability` can depend on `txscope.db.errors`
# without an import cycle.
