"""
InnerVoice - personalized quotes, letters and chat from your inner voice.

This package provides a small web service that turns a user's name, birth date
and mood into an inspirational quote and a comforting letter generated by an
LLM provider, plus a follow-up chat with the same persona.
"""

__version__ = "0.1.0"
