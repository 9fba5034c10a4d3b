"""Top-level package for the SafeTravel routing core.

This package computes least-time routes between two points of a road
graph with weighted A* and late reopening. Edge costs account for road
class, busy intersections and disruptions; an inflation weight trades
optimality for speed.
"""
