"""Business services for Task Service."""
