"""Trip suggestion generation and trip administration helpers."""
