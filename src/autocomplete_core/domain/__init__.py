"""Domain layer: state types, events and protocols."""
