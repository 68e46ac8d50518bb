"""Core configuration for the recipe search aggregator."""
