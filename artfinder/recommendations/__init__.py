"""
Artwork similarity recommendations.

Responsibilities:
- Pick a reference artwork for the requested artist.
- Load a (optionally time-windowed) candidate pool from the artwork store.
- Score candidates by weighted multi-attribute similarity.
- Apply same-artist damping and a per-artist cap for diversity.
"""
