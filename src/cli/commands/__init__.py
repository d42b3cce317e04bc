"""CLI sub-command groups, one module per resource."""
