"""Role-based access: roles, principal mappings and membership resolution."""
