"""Organizations (tenants) and their subscription state."""
