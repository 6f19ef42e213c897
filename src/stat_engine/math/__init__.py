"""Pure scoring, aggregation, leveling, streak and health formulas."""
