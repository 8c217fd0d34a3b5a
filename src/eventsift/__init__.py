"""
eventsift - Event extraction and normalization pipeline.

Turns LLM flyer output and scraped key/value data into canonical event
records, with natural-language date parsing and venue matching.
"""

__version__ = "0.1.0"
__app_name__ = "eventsift"
