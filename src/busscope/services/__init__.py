"""Service layer: name registry, introspection, graph walking, discovery."""
