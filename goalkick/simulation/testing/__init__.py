"""Testing infrastructure for the simulation.

Two types of testing:

1. Unit tests (pytest) - verify logic correctness
2. Scenario runners - produce logs/metrics for behavioral assessment

The scenario runners output tick-by-tick logs that can be read to judge
whether a kick "looks right": flight, entry, settling and scoring.
"""
