"""Infrastructure layer: catalog adapters and the command-line interface."""
