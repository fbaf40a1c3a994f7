"""Infrastructure layer - adapters for SSH and the web transport."""
