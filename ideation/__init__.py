"""
Ideation session service.

Streaming, cancellable AI brainstorming sessions with transcripts
checkpointed inside each project directory.
"""

__version__ = "0.1.0"
