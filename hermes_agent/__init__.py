"""Building blocks for a tool-using LLM chat agent: messages, stream parsing, compression, skills, local tools and retries."""

__version__ = "0.6.7"