"""Interaction session module for labelreader.

Contains the orchestrator that runs a scan from the capture tap through
analysis to the spoken result, and handles follow-up questions.

Public API:
    InteractionSession -- Central orchestrator
"""

from labelreader.session.interaction import InteractionSession

__all__ = ["InteractionSession"]
