"""Settings, database wiring, logging, security and the error taxonomy."""
