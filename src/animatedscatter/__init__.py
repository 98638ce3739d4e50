"""Animated scatterplot of per-entity indicators over a range of years."""
