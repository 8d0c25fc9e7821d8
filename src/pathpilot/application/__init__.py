"""Application layer: the decide use case and the ports it depends on."""
