"""RouteMethod: chat front-end for an LLM travel-itinerary planner."""

__version__ = "0.1.0"
