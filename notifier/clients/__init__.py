"""REST clients for stateful sinks."""
