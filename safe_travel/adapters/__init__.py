"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the routing core to external systems like:
- Graph storage (in-memory, CSV files)
- Route computation (weighted A*)
- Rendering engines (Folium)
"""
