"""Application layer: session orchestration, ideas and prompt context."""
