"""Domain layer: markdown rendering, itinerary text utilities and the trip form.

Domain modules do not depend on the UI or on the LLM client.
"""
