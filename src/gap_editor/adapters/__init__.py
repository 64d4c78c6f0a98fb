"""Host integrations for the gap buffer."""
