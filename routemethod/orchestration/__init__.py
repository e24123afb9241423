"""Conversation state and the LLM round trip.

Coordinates the planner session with the Messages API client; no UI concerns.
"""
