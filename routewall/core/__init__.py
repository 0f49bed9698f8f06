"""Core rule, inventory, and edge provider modules."""
