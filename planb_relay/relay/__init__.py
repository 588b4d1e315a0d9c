"""
Relay core - content normalization, stream frames and the PlanB/fallback coordinator
"""
