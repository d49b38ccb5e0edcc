"""Domain layer: error taxonomy and the ports the factory talks through."""
