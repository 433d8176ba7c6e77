"""Benchmarking harness.

Modules:
- engine: warm-up + count/duration driven repetition of full day runs
- metrics: prometheus metrics for benchmark and answer outcomes
"""
