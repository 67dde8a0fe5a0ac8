"""
Planet Slicer
=============

Real-time arcade game core: planets and bombs fly in from the screen edges
and are sliced by pressing the direction key shown on them.

- slicer_core: simulation, spawning, input resolution, game state machine,
  snapshots and the Gymnasium environment
- game_config.yaml: every gameplay tunable
"""
