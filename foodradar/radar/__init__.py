"""
Radar session flow.

Responsibilities:
- Track one user's scan from location through results to a picked winner.
- Run the timed random selection that lands on the winner.
- Keep per-browser sessions in memory.
"""
