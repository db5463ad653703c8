"""Strategy Builder: natural-language trading strategies compiled to signal trees."""
