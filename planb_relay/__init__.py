"""
PlanB chat relay - forwards chat conversations to the PlanB API and streams
the reply back in the AI SDK data stream format, with an LLM fallback.
"""

__version__ = "1.0.0"
