"""
txscope

Transactional query façade over a pooled relational-database connection.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal; the public API lives in `txscope.db.database` and
# `txscope.wiring`.
