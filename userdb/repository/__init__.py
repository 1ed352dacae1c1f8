"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services and the demo avoid SQL strings.
Every write goes through `statement.execute_prepared`, never string formatting.
"""
