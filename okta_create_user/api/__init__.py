"""HTTP surface for the create-user action."""
