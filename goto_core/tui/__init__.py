"""Interactive menu for picking an entry, built on textual."""
