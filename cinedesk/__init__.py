"""CineDesk: streaming catalog administration."""
