"""
Frog Jump Simulator

Core modules:
- models: core dataclasses (leaves, directions, turn records, run state)
- registry: leaf registry creation and consumed-flag updates
- resolver: nearest-leaf search along a diagonal ray
- engine: turn-by-turn state transitions
- trace: helpers for producing per-turn snapshots (no behavior changes)
"""
