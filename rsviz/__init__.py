"""Interactive Reeds-Shepp path visualizer."""
