"""tradefeed core modules."""
