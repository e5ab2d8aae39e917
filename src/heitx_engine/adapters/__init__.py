"""Host integrations for the engine."""
