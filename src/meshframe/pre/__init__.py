"""
The PRE layer turns a source file into normalized raw geometry:
parsing, recentering/rescaling and the optional UV projections.
"""
