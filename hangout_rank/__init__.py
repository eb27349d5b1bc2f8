"""
hangout-rank: link analysis for Singapore hangout places.

Ranks places in a directed, weighted graph of visit transitions with
PageRank, HITS, Randomised-HITS and Subspace-HITS, and compares the rankings.
Edge-list preparation, query parsing and presentation live outside this package.
"""

__version__ = "0.1.0"
