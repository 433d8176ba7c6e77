"""Runner harness for daily puzzle solvers.

Modules:
- selector: day/part selector parsing
- release: release-instant gating
- inputs: input acquisition (local store, network fetch, example extraction)
- golden: save/validate answer files
- bench: benchmarking engine + metrics
- runner: mode dispatch
"""

__version__ = "0.1.0"
