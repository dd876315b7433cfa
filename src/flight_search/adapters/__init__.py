"""
Adapter implementations for the flight search engine.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of the Amadeus and OpenRouter APIs, plus
in-memory sources for demos and tests.
"""
