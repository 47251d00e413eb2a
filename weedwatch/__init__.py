"""Backend for weed detection and watering logs."""
