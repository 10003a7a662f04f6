"""pygame presentation layer: renderer and input handling."""
