"""Incremental prose validation state engine.

The package tracks which ranges of a structured document need checking, keeps
the bookkeeping for validation requests that are still in flight and
reconciles asynchronous results against a document that keeps changing.  The
state is a single immutable :class:`~prosecheck.state.models.PluginState`
value advanced by :func:`~prosecheck.state.reducer.create_validation_reducer`.
"""

__version__ = "0.1.0"
