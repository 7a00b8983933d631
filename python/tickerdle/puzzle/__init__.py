"""Daily puzzle engine: scheduling, comparison, sessions and sharing."""
