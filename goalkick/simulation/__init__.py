"""Simulation - ball, kicker and goal, advanced one tick at a time.

Built around:
- A single 3D coordinate system (-Z toward the goal)
- Single-owner systems exposing frozen snapshots
- Deferred actions on simulation time, never wall-clock timers
- Seedable randomness for reproducible kicks
"""
