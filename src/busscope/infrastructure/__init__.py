"""Infrastructure: bus transport and the discovered-object tree."""
