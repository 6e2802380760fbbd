"""
point2d_ga: Gradient-free evolution of 2D points toward an unknown target

A population of points is tiered by fitness each generation. Each tier
breeds its own way, and only relative fitness steers the search.
"""

__version__ = "0.1.0"
