"""Application layer - search orchestration and ranking."""
