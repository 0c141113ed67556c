"""Application layer for the market bounded context."""
