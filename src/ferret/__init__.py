"""Ferret: command-line search across AnswerHub, GitHub and Slack."""

__version__ = "0.1.0"
