"""prompt-architect: chat front end and prompt library for a remote prompt-generation agent."""

__version__ = "0.1.0"
