"""
Billing dates test suite.

Covers the calendar primitives, anchor resolvers, every interval strategy
under both alignments and pay timings, and the engine-level clamps, errors
and cross-period properties.
"""
