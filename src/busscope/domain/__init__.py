"""Domain layer: records, faults, path rules, and the introspection schema parser."""
